"""
Default permission table applied when a group's access rights are created or backfilled.

Each role maps modules to either ``ALL`` (every action of the module) or the
explicit set of allowed actions. Anything not listed is denied.
"""
from typing import Dict, FrozenSet, Mapping, Union


ALL = "*"

ModuleRule = Union[str, FrozenSet[str]]


def _actions(*names: str) -> FrozenSet[str]:
    return frozenset(names)


_ADMIN: Mapping[str, ModuleRule] = {ALL: ALL}

_MANAGER: Mapping[str, ModuleRule] = {
    "users": _actions("view", "create", "edit", "export", "view_details"),
    "plan": ALL,
    "evaluations": _actions("view", "create", "edit"),
}

_TRAINER: Mapping[str, ModuleRule] = {
    "users": _actions("view", "view_details"),
    "plan": _actions("view"),
    "evaluations": ALL,
}

_COLLABORATOR: Mapping[str, ModuleRule] = {
    "users": _actions("view_details"),
    "evaluations": _actions("view", "create"),
}

_EMPLOYEE: Mapping[str, ModuleRule] = {
    "users": _actions("view_details"),
    "evaluations": _actions("view"),
}

_MANAGER_TRAINER: Mapping[str, ModuleRule] = {
    "users": _actions("view", "create", "edit", "view_details"),
    "plan": ALL,
    "evaluations": ALL,
}

_SUPPLIER: Mapping[str, ModuleRule] = {
    "plan": _actions("view"),
}


# Keys are lower-cased group names
DEFAULT_POLICY: Dict[str, Mapping[str, ModuleRule]] = {
    "admin": _ADMIN,
    "manager": _MANAGER,
    "formateur": _TRAINER,
    "trainer": _TRAINER,
    "collaborateur": _COLLABORATOR,
    "employé": _EMPLOYEE,
    "employe": _EMPLOYEE,
    "employee": _EMPLOYEE,
    "manager/formateur": _MANAGER_TRAINER,
    "formateur-manager": _MANAGER_TRAINER,
    "fournisseur": _SUPPLIER,
    "supplier": _SUPPLIER,
}


def default_permission(group_name: str, module: str, action: str) -> bool:
    """
    Default ``allowed`` flag for ``action`` on ``module`` in a group called ``group_name``.

    The group name is compared case-insensitively. Unknown groups, modules and
    actions are denied.
    """
    if not group_name:
        return False

    rules = DEFAULT_POLICY.get(group_name.lower())
    if rules is None:
        return False

    rule = rules.get(module, rules.get(ALL))
    if rule is None:
        return False
    if rule == ALL:
        return True
    return action in rule
