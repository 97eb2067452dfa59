"""
Admin menu registration

Menu contributors are registered once at application startup and applied
to a freshly built admin menu tree whenever the menu is requested.
"""
from dataclasses import dataclass, field
from typing import List, Optional, Protocol, Tuple

from customer_api.services.localization_service import LocalizationService
from customer_api.utils.logger import log

ADMIN_URL_PART = "Admin/"
LOCAL_PLUGINS_SYSTEM_NAME = "Local plugins"


@dataclass
class AdminMenuItem:
    system_name: str
    title: str = ""
    url: Optional[str] = None
    icon_class: Optional[str] = None
    visible: bool = True
    child_nodes: List["AdminMenuItem"] = field(default_factory=list)

    def find(self, system_name: str) -> Optional["AdminMenuItem"]:
        if self.system_name == system_name:
            return self
        for child in self.child_nodes:
            found = child.find(system_name)
            if found is not None:
                return found
        return None

    def _find_parent(self, system_name: str) -> Optional[Tuple["AdminMenuItem", int]]:
        for index, child in enumerate(self.child_nodes):
            if child.system_name == system_name:
                return self, index
            found = child._find_parent(system_name)
            if found is not None:
                return found
        return None

    def insert_after(self, sibling_system_name: str, item: "AdminMenuItem") -> None:
        """Insert item right after the named node, or at the end of the root."""
        found = self._find_parent(sibling_system_name)
        if found is None:
            log.warning(f"Menu item '{sibling_system_name}' not found, appending '{item.system_name}' to root")
            self.child_nodes.append(item)
            return
        parent, index = found
        parent.child_nodes.insert(index + 1, item)

    def to_dict(self) -> dict:
        return {
            "system_name": self.system_name,
            "title": self.title,
            "url": self.url,
            "icon_class": self.icon_class,
            "visible": self.visible,
            "child_nodes": [c.to_dict() for c in self.child_nodes],
        }


@dataclass
class MenuContext:
    localization: LocalizationService
    language_id: int
    store_location: str  # absolute store URL ending in "/"


class MenuContributor(Protocol):
    def register(self, root: AdminMenuItem, context: MenuContext) -> None:
        ...


class ApiMenuContributor:
    """Adds the API entry and its settings page after "Local plugins"."""

    def register(self, root: AdminMenuItem, context: MenuContext) -> None:
        plugin_menu_name = context.localization.get_resource(
            "Plugins.Api.Admin.Menu.Title", context.language_id, default_value="API"
        )
        settings_menu_name = context.localization.get_resource(
            "Plugins.Api.Admin.Menu.Settings.Title", context.language_id, default_value="API"
        )

        root.insert_after(
            LOCAL_PLUGINS_SYSTEM_NAME,
            AdminMenuItem(
                system_name="Api-Main-Menu",
                title=plugin_menu_name,
                icon_class="far fa-dot-circle",
                child_nodes=[
                    AdminMenuItem(
                        system_name="Api-Settings-Menu",
                        title=settings_menu_name,
                        url=context.store_location + ADMIN_URL_PART + "ApiAdmin/Settings",
                        icon_class="far fa-circle",
                    )
                ],
            ),
        )


def default_admin_menu() -> AdminMenuItem:
    """Base admin menu the contributors are applied to."""
    return AdminMenuItem(
        system_name="Home",
        title="Home",
        child_nodes=[
            AdminMenuItem(system_name="Dashboard", title="Dashboard", icon_class="fas fa-desktop"),
            AdminMenuItem(system_name="Customers", title="Customers", icon_class="far fa-user"),
            AdminMenuItem(
                system_name="Configuration",
                title="Configuration",
                icon_class="fas fa-cogs",
                child_nodes=[
                    AdminMenuItem(system_name="Settings", title="Settings", icon_class="far fa-dot-circle"),
                    AdminMenuItem(system_name=LOCAL_PLUGINS_SYSTEM_NAME, title="Local plugins", icon_class="far fa-dot-circle"),
                ],
            ),
        ],
    )


class AdminMenuRegistry:
    def __init__(self):
        self._contributors: List[MenuContributor] = []

    def register(self, contributor: MenuContributor) -> None:
        self._contributors.append(contributor)

    def clear(self) -> None:
        self._contributors.clear()

    def build(self, context: MenuContext) -> AdminMenuItem:
        root = default_admin_menu()
        for contributor in self._contributors:
            contributor.register(root, context)
        return root


admin_menu_registry = AdminMenuRegistry()
