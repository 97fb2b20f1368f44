"""Агрегации по записям о кофе.

Календарная статистика группируется по ``date``, статистика по времени суток -
по часу ``timestamp`` в часовом поясе пользователя.
"""
from collections import OrderedDict
from datetime import date, timedelta, tzinfo
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, Iterable, List


def round_half_up(value: float, digits: int = 0) -> float:
    quantum = Decimal(1).scaleb(-digits)
    result = Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP)
    return int(result) if digits == 0 else float(result)


def daily_totals(records: Iterable) -> "OrderedDict[date, int]":
    """Сумма чашек по дням, по возрастанию даты"""
    totals: Dict[date, int] = {}
    for record in records:
        totals[record.date] = totals.get(record.date, 0) + record.cups
    return OrderedDict(sorted(totals.items()))


def daily_breakdown(records: Iterable) -> List[dict]:
    totals: Dict[date, dict] = {}
    for record in records:
        bucket = totals.setdefault(record.date, {"date": record.date, "cups": 0, "records": 0})
        bucket["cups"] += record.cups
        bucket["records"] += 1
    return [totals[day] for day in sorted(totals)]


def hourly_distribution(records: Iterable, tz: tzinfo) -> List[dict]:
    """Распределение чашек по часам суток"""
    hourly = [{"hour": hour, "count": 0, "percentage": 0} for hour in range(24)]

    total = 0
    for record in records:
        hour = record.timestamp_utc.astimezone(tz).hour
        hourly[hour]["count"] += record.cups
        total += record.cups

    for bucket in hourly:
        bucket["percentage"] = round_half_up(bucket["count"] / total * 100) if total > 0 else 0

    return hourly


def weekday_pattern(records: Iterable) -> List[dict]:
    """Средние значения по дням недели, 0 - воскресенье"""
    pattern = [{"day": day, "total_cups": 0, "day_count": 0, "avg_cups": 0.0} for day in range(7)]

    for day, cups in daily_totals(records).items():
        bucket = pattern[(day.weekday() + 1) % 7]
        bucket["total_cups"] += cups
        bucket["day_count"] += 1

    for bucket in pattern:
        if bucket["day_count"]:
            bucket["avg_cups"] = round_half_up(bucket["total_cups"] / bucket["day_count"], 1)

    return pattern


def monthly_trend(records: Iterable) -> List[dict]:
    totals: Dict[str, int] = {}
    for record in records:
        key = record.date.strftime("%Y-%m")
        totals[key] = totals.get(key, 0) + record.cups
    return [{"month": month, "cups": totals[month]} for month in sorted(totals)]


def summary(records: List, today: date, days: int) -> dict:
    totals = daily_totals(records)
    total_cups = sum(totals.values())
    active_days = len(totals)

    week_start = today - timedelta(days=6)
    last_week = sum(cups for day, cups in totals.items() if week_start <= day <= today)

    return {
        "total_cups": total_cups,
        "record_days": days,
        "active_days": active_days,
        "avg_per_day": round_half_up(total_cups / active_days, 1) if active_days else 0.0,
        "max_per_day": max(totals.values(), default=0),
        "weekly_average": round_half_up(last_week / 7, 1),
    }
