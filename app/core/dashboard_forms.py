# app/core/dashboard_forms.py
from typing import Dict, List

from app.schemas.dashboard import DashboardFormConfig

# Attendance forms with a monthly recap on the dashboard.
DASHBOARD_FORMS: Dict[str, DashboardFormConfig] = {
    "profmud": DashboardFormConfig(
        key="profmud",
        title="Pengajian GPN Profmud",
        description="Rekap bulanan per pertemuan (kategori GPN A & GPN B)",
        form_id="ead72bcf-128c-4542-8baa-adc11fae27b4",
        allowed_categories=["GPN A", "GPN B"],
    ),
    "ar": DashboardFormConfig(
        key="ar",
        title="Pengajian AR Intensif",
        description="Rekap bulanan per pertemuan (kategori AR)",
        form_id="f9bb2544-c985-4381-adc5-76b80c93dd4f",
        allowed_categories=["AR"],
    ),
}


def list_dashboard_forms() -> List[DashboardFormConfig]:
    return list(DASHBOARD_FORMS.values())


def get_dashboard_form(key: str) -> DashboardFormConfig:
    """
    Resolve a dashboard form by key.

    Raises LookupError for unknown keys.
    """
    try:
        return DASHBOARD_FORMS[key]
    except KeyError:
        raise LookupError(f"Dashboard form '{key}' not found") from None
