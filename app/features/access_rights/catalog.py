"""
Catalog of the platform's modules and the actions each one exposes.

A catalog is an immutable value: it is built once when the application starts,
stored on ``app.state`` and handed to the services that need it. Registering a
module produces a new catalog rather than mutating the running one.
"""
from types import MappingProxyType
from typing import Iterable, Iterator, Mapping, Tuple

from app.utils import get_logger


log = get_logger(__name__)


# Ordered module -> ordered (action, label) pairs
DEFAULT_MODULE_ACTIONS: Tuple[Tuple[str, Tuple[Tuple[str, str], ...]], ...] = (
    ("users", (
        ("view", "Voir la liste des utilisateurs"),
        ("create", "Créer un nouvel utilisateur"),
        ("edit", "Modifier un utilisateur"),
        ("delete", "Supprimer un utilisateur"),
        ("export", "Exporter la liste des utilisateurs"),
        ("view_details", "Voir les détails d'un utilisateur"),
        ("import", "Importer des utilisateurs (CSV)"),
        ("change_status", "Changer le statut d'un utilisateur"),
        ("change_role", "Changer le rôle d'un utilisateur"),
        ("assign_manager", "Assigner un manager"),
    )),
    ("plan", (
        ("view", "Voir les plans de formation"),
        ("create", "Créer un plan de formation"),
        ("edit", "Modifier un plan de formation"),
        ("delete", "Supprimer un plan"),
        ("approve", "Approuver un plan"),
        ("publish", "Publier un plan"),
        ("export", "Exporter un plan"),
        ("duplicate", "Dupliquer un plan"),
    )),
    ("evaluations", (
        ("view", "Voir les évaluations"),
        ("create", "Créer une évaluation"),
        ("edit", "Modifier une évaluation"),
        ("delete", "Supprimer une évaluation"),
        ("respond", "Répondre à une évaluation"),
        ("approve", "Approuver une évaluation"),
        ("publish", "Publier une évaluation"),
        ("view_results", "Voir les résultats d'évaluation"),
    )),
    ("needs", (
        ("view", "Voir les besoins de formation"),
        ("create", "Créer un besoin"),
        ("edit", "Modifier un besoin"),
        ("delete", "Supprimer un besoin"),
        ("validate", "Valider un besoin"),
        ("assign", "Assigner un besoin"),
    )),
    ("groups", (
        ("view", "Voir les groupes"),
        ("create", "Créer un groupe"),
        ("edit", "Modifier un groupe"),
        ("delete", "Supprimer un groupe"),
        ("manage_permissions", "Gérer les permissions"),
    )),
    ("reports", (
        ("view", "Voir les rapports"),
        ("generate", "Générer des rapports"),
        ("export", "Exporter des rapports"),
        ("schedule", "Programmer des rapports"),
    )),
    ("settings", (
        ("view", "Voir les paramètres"),
        ("edit", "Modifier les paramètres"),
        ("manage_company", "Gérer les informations entreprise"),
        ("manage_notifications", "Gérer les notifications"),
    )),
)


_EMPTY: Mapping[str, str] = MappingProxyType({})


class ModuleCatalog:
    """Read-only mapping of module name to an ordered mapping of action -> label."""

    def __init__(self, modules: Mapping[str, Mapping[str, str]]):
        self._modules: Mapping[str, Mapping[str, str]] = MappingProxyType({
            module: MappingProxyType(dict(actions))
            for module, actions in modules.items()
        })

    @classmethod
    def default(cls) -> "ModuleCatalog":
        return cls({module: dict(actions) for module, actions in DEFAULT_MODULE_ACTIONS})

    def register(self, module: str, actions: Mapping[str, str]) -> "ModuleCatalog":
        """Return a new catalog that also contains ``module`` (replacing any previous definition)."""
        modules = {name: dict(existing) for name, existing in self._modules.items()}
        modules[module] = dict(actions)
        log.info("Module %s registered with %d actions", module, len(actions))
        return ModuleCatalog(modules)

    def available_modules(self) -> list[str]:
        return list(self._modules)

    def module_actions(self, module: str) -> Mapping[str, str]:
        """Actions of ``module``; empty for an unknown module."""
        return self._modules.get(module, _EMPTY)

    def pairs(self) -> Iterator[Tuple[str, str]]:
        """Every (module, action) pair, in catalog order."""
        for module, actions in self._modules.items():
            for action in actions:
                yield module, action

    def as_dict(self) -> dict[str, dict[str, str]]:
        """Plain nested dict copy, suitable for JSON responses."""
        return {module: dict(actions) for module, actions in self._modules.items()}

    def __iter__(self) -> Iterator[str]:
        return iter(self._modules)

    def __len__(self) -> int:
        return len(self._modules)

    def __contains__(self, module: object) -> bool:
        return module in self._modules

    def __repr__(self) -> str:
        return f"<ModuleCatalog(modules={list(self._modules)})>"


def build_catalog(extra: Iterable[Tuple[str, Mapping[str, str]]] = ()) -> ModuleCatalog:
    """Built-in catalog plus any ``(module, actions)`` extensions."""
    catalog = ModuleCatalog.default()
    for module, actions in extra:
        catalog = catalog.register(module, actions)
    return catalog
