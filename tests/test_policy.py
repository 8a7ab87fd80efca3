import pytest

from app.features.access_rights.catalog import build_catalog
from app.features.access_rights.policy import default_permission


CATALOG_PAIRS = list(build_catalog().pairs())


# Allowed (module, action) pairs per built-in role; everything else is denied
EXPECTED_ALLOWED = {
    "Admin": set(CATALOG_PAIRS),
    "Manager": {
        ("users", "view"), ("users", "create"), ("users", "edit"),
        ("users", "export"), ("users", "view_details"),
        *[("plan", action) for module, action in CATALOG_PAIRS if module == "plan"],
        ("evaluations", "view"), ("evaluations", "create"), ("evaluations", "edit"),
    },
    "Formateur": {
        ("users", "view"), ("users", "view_details"),
        ("plan", "view"),
        *[("evaluations", action) for module, action in CATALOG_PAIRS if module == "evaluations"],
    },
    "Collaborateur": {
        ("users", "view_details"),
        ("evaluations", "view"), ("evaluations", "create"),
    },
    "Employé": {
        ("users", "view_details"),
        ("evaluations", "view"),
    },
    "Manager/Formateur": {
        ("users", "view"), ("users", "create"), ("users", "edit"), ("users", "view_details"),
        *[(module, action) for module, action in CATALOG_PAIRS if module in ("plan", "evaluations")],
    },
    "Fournisseur": {
        ("plan", "view"),
    },
}


@pytest.mark.parametrize("role", sorted(EXPECTED_ALLOWED))
@pytest.mark.parametrize("module,action", CATALOG_PAIRS)
def test_default_permission_matches_policy_table(role, module, action):
    expected = (module, action) in EXPECTED_ALLOWED[role]
    assert default_permission(role, module, action) is expected


@pytest.mark.parametrize("alias,role", [
    ("trainer", "Formateur"),
    ("employee", "Employé"),
    ("Employe", "Employé"),
    ("formateur-manager", "Manager/Formateur"),
    ("supplier", "Fournisseur"),
])
def test_role_aliases_share_policy(alias, role):
    for module, action in CATALOG_PAIRS:
        assert default_permission(alias, module, action) == default_permission(role, module, action)


@pytest.mark.parametrize("name", ["ADMIN", "admin", "aDmIn"])
def test_group_name_is_case_insensitive(name):
    assert default_permission(name, "settings", "manage_company") is True


@pytest.mark.parametrize("name", [" Admin ", "Admin ", "\tmanager"])
def test_group_name_whitespace_is_significant(name):
    assert not any(default_permission(name, module, action) for module, action in CATALOG_PAIRS)


@pytest.mark.parametrize("name", ["", "Stagiaire", "Direction", "administrator", "manager formateur"])
def test_unknown_groups_are_denied_everything(name):
    assert not any(default_permission(name, module, action) for module, action in CATALOG_PAIRS)


def test_unknown_module_and_action_are_denied_except_for_admin():
    assert default_permission("Manager", "payroll", "view") is False
    assert default_permission("Manager", "users", "impersonate") is False
    assert default_permission("Admin", "payroll", "view") is True
