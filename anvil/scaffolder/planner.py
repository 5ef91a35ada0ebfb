"""Pure computation of the file tree for a ``ProjectConfig``.

``ProjectPlanner.plan`` performs no I/O.  It walks the module matrix in the
fixed generation order and returns a ``ProjectTree`` whose entries are in
the order a writer must apply them.
"""

from __future__ import annotations

from .matrix import build_descriptor, module_package, root_build_descriptor, stubs_for
from .models import GENERATION_ORDER, Module, ProjectConfig, ProjectTree
from .templates import TemplateRenderer


SETTINGS_FILE = "settings.gradle"
BUILD_FILE = "build.gradle"
APPLICATION_CONFIG = "application.yml"

MAIN_JAVA = "src/main/java"
TEST_JAVA = "src/test/java"
MAIN_RESOURCES = "src/main/resources"


class ProjectPlanner:
    """Maps a validated ``ProjectConfig`` to an ordered ``ProjectTree``."""

    def __init__(self, config: ProjectConfig, renderer: TemplateRenderer | None = None) -> None:
        self.config = config
        self.renderer = renderer or TemplateRenderer()

    # -- Public API --------------------------------------------------------

    def plan(self) -> ProjectTree:
        """Compute every directory and file of the generated project."""
        root = self.config.root_name
        tree = ProjectTree(root=root)

        tree.add_directory(root)
        tree.add_file(f"{root}/{SETTINGS_FILE}", self.render_settings())
        tree.add_file(f"{root}/{BUILD_FILE}", self.render_root_build())

        for module in GENERATION_ORDER:
            self._plan_module(tree, module)

        return tree

    # -- Root descriptors --------------------------------------------------

    def render_settings(self) -> str:
        # Always the four modules, whatever the feature flags.
        return self.renderer.render(
            "gradle/settings.gradle.j2",
            {
                "root_name": self.config.root_name,
                "modules": [m.value for m in Module],
            },
        )

    def render_root_build(self) -> str:
        return self.renderer.render(
            "gradle/build.gradle.j2",
            {"build": root_build_descriptor(self.config)},
        )

    # -- Modules -----------------------------------------------------------

    def render_module_build(self, module: Module) -> str:
        return self.renderer.render(
            "gradle/module.build.gradle.j2",
            {"build": build_descriptor(module, self.config)},
        )

    def _plan_module(self, tree: ProjectTree, module: Module) -> None:
        module_root = f"{tree.root}/{module.value}"
        base_path = self.config.base_package_path
        main_java = f"{module_root}/{MAIN_JAVA}"

        tree.add_directory(f"{main_java}/{base_path}")
        tree.add_directory(f"{module_root}/{TEST_JAVA}/{base_path}")

        if module is Module.API:
            tree.add_directory(f"{module_root}/{MAIN_RESOURCES}")
            tree.add_file(f"{module_root}/{MAIN_RESOURCES}/{APPLICATION_CONFIG}", "")

        for stub in stubs_for(module, self.config):
            tree.add_file(
                f"{main_java}/{stub.relative_path}",
                self.renderer.render("java/stub.java.j2", {"stub": stub}),
            )

        if module is Module.API:
            class_name = self.config.application_class_name
            tree.add_file(
                f"{main_java}/{base_path}/{class_name}.java",
                self.renderer.render(
                    "java/application.java.j2",
                    {
                        "package": module_package(module, self.config),
                        "class_name": class_name,
                    },
                ),
            )

        tree.add_file(f"{module_root}/{BUILD_FILE}", self.render_module_build(module))
