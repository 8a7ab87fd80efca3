import pytest

from app.features.access_rights.catalog import ModuleCatalog, build_catalog


def test_default_catalog_modules_in_order():
    catalog = ModuleCatalog.default()

    assert catalog.available_modules() == [
        "users", "plan", "evaluations", "needs", "groups", "reports", "settings",
    ]
    assert list(catalog.module_actions("groups")) == [
        "view", "create", "edit", "delete", "manage_permissions",
    ]
    assert catalog.module_actions("reports")["schedule"] == "Programmer des rapports"


def test_unknown_module_has_no_actions():
    catalog = build_catalog()

    assert dict(catalog.module_actions("payroll")) == {}
    assert "payroll" not in catalog
    assert "users" in catalog


def test_catalog_is_read_only():
    catalog = build_catalog()

    with pytest.raises(TypeError):
        catalog.module_actions("users")["view"] = "changed"  # type: ignore[index]


def test_register_returns_new_catalog():
    catalog = build_catalog()

    extended = catalog.register("payroll", {"view": "Voir la paie", "export": "Exporter la paie"})

    assert "payroll" in extended
    assert list(extended.module_actions("payroll")) == ["view", "export"]
    assert "payroll" not in catalog
    assert len(extended) == len(catalog) + 1


def test_build_catalog_with_extensions():
    catalog = build_catalog([("trainings", {"view": "Voir les formations"})])

    assert catalog.available_modules()[-1] == "trainings"
    assert ("trainings", "view") in set(catalog.pairs())


def test_as_dict_is_a_copy():
    catalog = build_catalog()

    data = catalog.as_dict()
    data["users"]["view"] = "changed"

    assert catalog.module_actions("users")["view"] == "Voir la liste des utilisateurs"
