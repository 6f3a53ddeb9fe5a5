##############################################################################
# Copyright (c) ghostdb Project developers. See top-level LICENSE and
# COPYRIGHT files for dates and other details. No copyright assignment is
# required to contribute to ghostdb.
##############################################################################

"""
Name-to-class registries shared by the store and entity set factories.

A `GhostBaseFactory` maps names to classes. The store factory keys its classes
by backend name (`memory`, `redis`, ...), while the entity set factory keys them
by entity type name and falls back to a default set class. Classes shipped by
other packages are picked up from an entry point group the first time a name
can't be found.
"""

import logging
from importlib.metadata import entry_points
from typing import Any, ClassVar, Dict, Iterable, Optional, Type


LOG = logging.getLogger(__name__)


class GhostBaseFactory:
    """
    Registry of classes that can be looked up by name or alias.

    Subclasses set the class attributes below and override `_register_builtins`
    to register the classes ghostdb ships with.

    Attributes:
        component_base (ClassVar[type]): Every registered class must subclass this.
        entry_point_group (ClassVar[str]): Entry point group scanned for plugin classes.
        not_found_error (ClassVar[Type[Exception]]): Raised by `get` for unknown names.

    Methods:
        register: Bind a class to a name and, optionally, to aliases of that name.
        canonical_name: Resolve an alias to the name it stands for.
        lookup: Get the class bound to a name, or None.
        get: Get the class bound to a name, raising if there isn't one.
        create: Instantiate the class bound to a name.
    """

    component_base: ClassVar[type] = object
    entry_point_group: ClassVar[Optional[str]] = None
    not_found_error: ClassVar[Type[Exception]] = LookupError

    def __init__(self):
        self._classes: Dict[str, type] = {}
        self._aliases: Dict[str, str] = {}
        self._plugins_loaded = False
        self._register_builtins()

    def _register_builtins(self):
        """
        Register the classes available without any plugin. Nothing by default.
        """

    def register(self, name: str, component_class: Any, aliases: Iterable[str] = ()):
        """
        Bind `component_class` to `name`, replacing any class already bound to it.

        Args:
            name: The name to look the class up by.
            component_class: The class to bind.
            aliases: Other names that resolve to `name`.

        Raises:
            TypeError: If `component_class` isn't a subclass of `component_base`.
        """
        if not (isinstance(component_class, type) and issubclass(component_class, self.component_base)):
            raise TypeError(f"{component_class} must inherit from {self.component_base.__name__}")

        if name in self._classes:
            LOG.debug(f"Replacing {self._classes[name].__name__} with {component_class.__name__} for '{name}'.")
        self._classes[name] = component_class
        for alias in aliases:
            self._aliases[alias] = name
        LOG.debug(f"Registered {component_class.__name__} as '{name}' (aliases: {list(aliases) or 'none'}).")

    def canonical_name(self, name: str) -> str:
        """
        Resolve an alias to the name it was registered for.

        Args:
            name: A registered name or an alias.

        Returns:
            The registered name, or `name` unchanged when it isn't an alias.
        """
        return self._aliases.get(name, name)

    def _load_plugins(self):
        """
        Register every class published under `entry_point_group`. Runs at most
        once; an entry point that can't be loaded or registered is logged and skipped.
        """
        if self._plugins_loaded or self.entry_point_group is None:
            return
        self._plugins_loaded = True

        for entry_point in entry_points(group=self.entry_point_group):
            try:
                self.register(entry_point.name, entry_point.load())
            except (ImportError, AttributeError, TypeError) as exc:
                LOG.warning(f"Skipping plugin '{entry_point.name}' from '{self.entry_point_group}': {exc}")

    def lookup(self, name: str) -> Optional[type]:
        """
        Get the class bound to a name or alias. Plugins are loaded the first time
        a name isn't already registered.

        Args:
            name: A registered name or an alias.

        Returns:
            The bound class, or None if nothing is bound to `name`.
        """
        canonical = self.canonical_name(name)
        if canonical not in self._classes:
            self._load_plugins()
        return self._classes.get(canonical)

    def get(self, name: str) -> type:
        """
        Get the class bound to a name or alias.

        Args:
            name: A registered name or an alias.

        Returns:
            The bound class.

        Raises:
            not_found_error: If nothing is bound to `name`.
        """
        component_class = self.lookup(name)
        if component_class is None:
            raise self.not_found_error(f"'{name}' is not supported. Registered names: {', '.join(self._classes)}")
        return component_class

    def create(self, name: str, **kwargs) -> Any:
        """
        Instantiate the class bound to a name or alias.

        Args:
            name: A registered name or an alias.
            **kwargs: Keyword arguments for the class's constructor.

        Returns:
            A new instance of the bound class.
        """
        component_class = self.get(name)
        LOG.debug(f"Creating {component_class.__name__} for '{name}'.")
        return component_class(**kwargs)
