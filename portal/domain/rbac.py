"""Role-based layout, landing route, permission and menu configuration."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from portal.domain.models import User, normalize_role_name

LOGIN_ROUTE = "/login"
ASSESSOR_DASHBOARD = "/asesor/dashboard"
ASSESSEE_DASHBOARD = "/asesi/dashboard"


@dataclass(slots=True, frozen=True)
class MenuItem:
    title: str
    path: str


@dataclass(slots=True, frozen=True)
class RoleConfig:
    name: str
    layout: str
    default_route: str
    permissions: frozenset[str]
    menus: tuple[MenuItem, ...]


ROLE_CONFIGS: dict[str, RoleConfig] = {
    "Admin LSP": RoleConfig(
        name="Admin LSP",
        layout="dashboard-admin",
        default_route="/admin-lsp/dashboard",
        permissions=frozenset({"view_all_assessment_status", "view_reports"}),
        menus=(
            MenuItem("Dashboard", "/admin-lsp/dashboard"),
            MenuItem("Laporan Sertifikasi", "/admin-lsp/reports"),
            MenuItem("Manajemen User", "/admin-lsp/users"),
            MenuItem("Pengaturan", "/admin-lsp/settings"),
        ),
    ),
    "Direktur LSP": RoleConfig(
        name="Direktur LSP",
        layout="dashboard-executive",
        default_route="/direktur/tandatangan",
        permissions=frozenset(
            {"sign_document", "view_signed_documents", "view_unsigned_documents"}
        ),
        menus=(
            MenuItem("Tandatangan", "/direktur/tandatangan"),
            MenuItem("Sudah Ditandatangani", "/direktur/sudah-ditandatangani"),
            MenuItem("Belum Ditandatangani", "/direktur/belum-ditandatangani"),
        ),
    ),
    "Manajer Sertifikasi": RoleConfig(
        name="Manajer Sertifikasi",
        layout="dashboard-manager",
        default_route="/manajer/dashboard",
        permissions=frozenset({"monitor_assessment"}),
        menus=(
            MenuItem("Monitoring Sertifikasi", "/manajer/monitoring"),
            MenuItem("Daftar Asesi", "/manajer/asesi"),
        ),
    ),
    "Admin TUK": RoleConfig(
        name="Admin TUK",
        layout="dashboard-admin",
        default_route="/admin-tuk/dashboard",
        permissions=frozenset(
            {
                "verify_personal_documents",
                "submit_verification_status",
                "start_pra_assessment",
                "start_assessment",
            }
        ),
        menus=(
            MenuItem("Dashboard", "/admin-tuk/dashboard"),
            MenuItem("Verifikasi Asesi", "/admin-tuk/verification"),
            MenuItem("Jadwal Asesmen", "/admin-tuk/schedule"),
        ),
    ),
    "Asesor": RoleConfig(
        name="Asesor",
        layout="dashboard-asesor",
        default_route=ASSESSOR_DASHBOARD,
        permissions=frozenset({"view_assigned_assesi", "submit_assessment_result"}),
        menus=(
            MenuItem("Dashboard", ASSESSOR_DASHBOARD),
            MenuItem("Jadwal Asesmen", "/asesor/schedule"),
            MenuItem("Penilaian", "/asesor/assessment"),
            MenuItem("Daftar Asesi", "/asesor/asesi"),
        ),
    ),
    "Asesi": RoleConfig(
        name="Asesi",
        layout="dashboard-asesi",
        default_route=ASSESSEE_DASHBOARD,
        permissions=frozenset({"confirm_personal_data", "join_assessment"}),
        menus=(
            MenuItem("Dashboard", ASSESSEE_DASHBOARD),
            MenuItem("Profil Saya", "/asesi/profile"),
            MenuItem("Sertifikasi", "/asesi/assessment"),
            MenuItem("Dokumen", "/asesi/documents"),
        ),
    ),
    "Komtek": RoleConfig(
        name="Komtek",
        layout="dashboard-executive",
        default_route="/komtek/tandatangan",
        permissions=frozenset(
            {"sign_document", "view_signed_documents", "view_unsigned_documents"}
        ),
        menus=(
            MenuItem("Tandatangan", "/komtek/tandatangan"),
            MenuItem("Sudah Ditandatangani", "/komtek/sudah-ditandatangani"),
            MenuItem("Belum Ditandatangani", "/komtek/belum-ditandatangani"),
        ),
    ),
}

_CONFIGS_BY_NAME = {normalize_role_name(name): config for name, config in ROLE_CONFIGS.items()}


def get_role_config(role_name: str | None) -> RoleConfig | None:
    if not role_name:
        return None
    return _CONFIGS_BY_NAME.get(normalize_role_name(role_name))


def get_menus(role_name: str | None) -> tuple[MenuItem, ...]:
    config = get_role_config(role_name)
    if config is None:
        return ()
    return config.menus


def has_permission(permissions: Iterable[str], required: str) -> bool:
    return required in set(permissions)


def has_any_permission(permissions: Iterable[str], required: Iterable[str]) -> bool:
    granted = set(permissions)
    return any(permission in granted for permission in required)


def default_route_for(role_name: str | None) -> str:
    """Landing route for a role, or the login page for unknown roles."""
    config = get_role_config(role_name)
    if config is None:
        return LOGIN_ROUTE
    return config.default_route


def dashboard_route_for(is_assessor: bool) -> str:
    return ASSESSOR_DASHBOARD if is_assessor else ASSESSEE_DASHBOARD


def can_view_assessee_workspace(user: User | None) -> bool:
    """Assessees always; assessors only once they carry a registration number."""
    if user is None:
        return False
    if user.has_role("Asesi"):
        return True
    return user.has_role("Asesor") and bool(user.reg_no)
