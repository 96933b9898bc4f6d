"""
Arithmétique de jour calendaire dans le fuseau de référence (UTC+5:30).

Tout est fait à offset fixe : on n'utilise jamais le fuseau local du serveur.
Un instant naïf est considéré comme UTC.
"""

from datetime import date, datetime, timedelta, timezone
from typing import Optional, Tuple

from app.core.config import settings

REFERENCE_OFFSET = timedelta(minutes=settings.REFERENCE_UTC_OFFSET_MINUTES)
REFERENCE_TZ = timezone(REFERENCE_OFFSET)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(instant: datetime) -> datetime:
    """Ramène un instant (naïf ou non) en UTC aware"""
    if instant.tzinfo is None:
        return instant.replace(tzinfo=timezone.utc)
    return instant.astimezone(timezone.utc)


def to_reference_time(instant: datetime) -> datetime:
    """Heure murale dans le fuseau de référence"""
    return as_utc(instant).astimezone(REFERENCE_TZ)


def to_reference_day(instant: datetime) -> date:
    """
    Jour calendaire de référence d'un instant.

    On ajoute l'offset constant puis on tronque à la date :
    18:29:59 UTC -> même jour, 18:30:00 UTC -> jour suivant.
    """
    shifted = as_utc(instant) + REFERENCE_OFFSET
    return shifted.date()


def reference_today(now: Optional[datetime] = None) -> date:
    return to_reference_day(now if now is not None else utc_now())


def day_key(day: date) -> str:
    return day.isoformat()


def day_bounds_utc(day: date) -> Tuple[datetime, datetime]:
    """Bornes UTC [début, fin) du jour de référence"""
    start = datetime(day.year, day.month, day.day, tzinfo=timezone.utc) - REFERENCE_OFFSET
    return start, start + timedelta(days=1)


def day_window(days: int, now: Optional[datetime] = None) -> Tuple[date, date]:
    """Fenêtre inclusive des `days` derniers jours se terminant aujourd'hui"""
    end = reference_today(now)
    start = end - timedelta(days=days - 1)
    return start, end
