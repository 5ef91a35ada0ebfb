"""Main scaffolding orchestrator.

Takes a ``ProjectConfig`` and generates a multi-module Spring Boot / Gradle
project (``domain``, ``application``, ``infrastructure``, ``api``) below an
output directory.  Planning is delegated to ``ProjectPlanner`` and all I/O to
a ``TreeWriter``, so the same generator drives the real filesystem and the
in-memory writer used by tests.
"""

from __future__ import annotations

from pathlib import Path

from .models import GeneratedDirectory, ProjectConfig, ProjectTree
from .planner import ProjectPlanner
from .templates import TemplateRenderer
from .writer import FileSystemWriter, ProjectExistsError, TreeWriter


class ProjectGenerator:
    """Generates the project tree for one ``ProjectConfig``.

    Re-running against an existing root is rejected before anything is
    written unless ``overwrite=True`` is passed, in which case every planned
    file is rewritten in place.  Files outside the plan are never touched.
    """

    def __init__(
        self,
        config: ProjectConfig,
        writer: TreeWriter | None = None,
        renderer: TemplateRenderer | None = None,
    ) -> None:
        self.config = config
        self.renderer = renderer or TemplateRenderer()
        self.planner = ProjectPlanner(config, self.renderer)
        self._writer = writer

    # -- Public API --------------------------------------------------------

    def plan(self) -> ProjectTree:
        """Return the tree that :meth:`generate` would write."""
        return self.planner.plan()

    def generate(self, output_dir: str | Path | None = None, *, overwrite: bool = False) -> Path:
        """Generate the complete project structure.

        Args:
            output_dir: Parent directory of the project root.  Defaults to the
                current working directory.  Ignored when an explicit writer
                was injected, except for computing the returned path.
            overwrite: Regenerate in place when the root already exists.

        Returns:
            Path to the generated project root (``<output_dir>/<name>-api``).

        Raises:
            ProjectExistsError: The root exists and *overwrite* is false.
            FileSystemError: A directory or file could not be created.
        """
        base = Path(output_dir) if output_dir is not None else Path.cwd()
        writer = self._writer or FileSystemWriter(base)
        tree = self.plan()

        if writer.exists(tree.root) and not overwrite:
            raise ProjectExistsError(base / tree.root)

        for entry in tree.entries:
            if isinstance(entry, GeneratedDirectory):
                writer.make_dirs(entry.path)
            else:
                writer.write_file(entry.path, entry.content)

        return base / tree.root
