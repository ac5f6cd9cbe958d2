from enum import Enum


class EndOfPeriodPolicy(str, Enum):
    """How the end-of-period headcount treats same-day exits.

    Values:
        COUNT_ONCE: Every worker present at month end is counted once.
            Same-day exits already satisfy ``end >= month_end`` and are
            reported only as a sub-count.
        ADDITIVE: Active-at-month-end count plus the same-day exit count.
            Same-day exits are counted twice; kept for parity with the
            legacy reports.
    """
    COUNT_ONCE = "count_once"
    ADDITIVE = "additive"


class ReportType(str, Enum):
    """Report services exposed by the HR source, keyed as in its URLs."""
    PAYROLL_SALARIES = "salarios-nomina"
    ORGANIZATIONAL_SUMMARY = "resumen-organizacional"
    ADVANCED_SEARCH = "busqueda-avanzada"
    PERSONNEL_ROTATION = "rotacion-personal"


MONTHS_PER_YEAR = 12

DEFAULT_MONTH_NAMES = (
    "Enero",
    "Febrero",
    "Marzo",
    "Abril",
    "Mayo",
    "Junio",
    "Julio",
    "Agosto",
    "Septiembre",
    "Octubre",
    "Noviembre",
    "Diciembre",
)
