"""
===============================================================================
TARJETA CRC - domain/periods.py
===============================================================================

Módulo:
    Límites de período para reportes

Responsabilidades:
    - Calcular el inicio del período (diario/semanal/mensual) relativo a "now".
    - Respetar la zona horaria de "now" (hora local del reporte).

Reglas:
    - daily: hoy 00:00
    - weekly: domingo más reciente 00:00 (hoy si es domingo)
    - monthly: día 1 del mes 00:00
===============================================================================
"""

from __future__ import annotations

from datetime import datetime, timedelta

from .entities import ReportType


def _midnight(moment: datetime) -> datetime:
    return moment.replace(hour=0, minute=0, second=0, microsecond=0)


def period_start(report_type: ReportType, now: datetime) -> datetime:
    """Inicio del período que cubre un reporte generado en `now`."""
    report_type = ReportType(report_type)
    today = _midnight(now)

    if report_type == ReportType.DAILY:
        return today

    if report_type == ReportType.WEEKLY:
        # R: weekday(): lunes=0 ... domingo=6 -> días desde el último domingo.
        days_since_sunday = (now.weekday() + 1) % 7
        return today - timedelta(days=days_since_sunday)

    return today.replace(day=1)
