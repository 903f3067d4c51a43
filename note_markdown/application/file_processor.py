"""File rendering service."""
from __future__ import annotations

import html
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Optional

import pathspec

from ..domain.configuration import RenderConfig
from .converter import MarkdownConverter

logger = logging.getLogger(__name__)

STANDALONE_TEMPLATE = """<!DOCTYPE html>
<html>
<head>
<meta charset="{encoding}">
<title>{title}</title>
</head>
<body>
{body}
</body>
</html>
"""


@dataclass
class RenderReport:
    """Outcome of a batch render."""

    rendered: List[Path] = field(default_factory=list)
    failed: List[Path] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return bool(self.rendered) and not self.failed


class NoteRenderer:
    """Render note files to HTML."""

    def __init__(self, config: Optional[RenderConfig] = None):
        """
        Initialize the renderer.

        Args:
            config: Render configuration (defaults when omitted)
        """
        self.config = config or RenderConfig()
        self._ignore_spec = self._build_spec(self._ignore_patterns())
        self._include_spec = (
            self._build_spec(self.config.sources.include)
            if self.config.sources.include
            else None
        )

    @staticmethod
    def _build_spec(patterns: Iterable[str]) -> pathspec.PathSpec:
        return pathspec.PathSpec.from_lines("gitwildmatch", patterns)

    def _ignore_patterns(self) -> List[str]:
        patterns = list(self.config.sources.ignore)
        ignore_file = self.config.sources.ignore_file
        if ignore_file and ignore_file.exists():
            lines = ignore_file.read_text(encoding="utf-8").splitlines()
            patterns.extend(
                line.strip() for line in lines if line.strip() and not line.startswith("#")
            )
        return patterns

    def is_note_file(self, path: Path, root: Optional[Path] = None) -> bool:
        """Check extension and ignore/include patterns for a file."""
        if path.suffix.lower() not in self.config.sources.extensions:
            return False
        relative = path.name
        if root is not None:
            try:
                relative = path.relative_to(root).as_posix()
            except ValueError:
                relative = path.name
        if self._ignore_spec.match_file(relative):
            return False
        if self._include_spec is not None and not self._include_spec.match_file(relative):
            return False
        return True

    def discover_files(self, input_paths: List[str]) -> List[Path]:
        """
        Discover note files to render.

        Args:
            input_paths: Files or directories; directories are walked recursively

        Returns:
            Sorted list of note files
        """
        files = []
        for path_str in input_paths or ["."]:
            path = Path(path_str)
            if path.is_file():
                # Named files skip the include/ignore patterns.
                if path.suffix.lower() in self.config.sources.extensions:
                    files.append(path)
            elif path.is_dir():
                for item in sorted(path.rglob("*")):
                    if item.is_file() and self.is_note_file(item, root=path):
                        files.append(item)
            else:
                logger.warning("Skipping missing path %s", path)
        return files

    def output_path_for(self, source: Path) -> Path:
        name = source.stem + self.config.output.suffix
        if self.config.output.output_dir is not None:
            return self.config.output.output_dir / name
        return source.with_name(name)

    def render_text(self, text: str, title: Optional[str] = None) -> str:
        """
        Render one note body.

        Args:
            text: Markdown source
            title: Document title used when wrapping a standalone page

        Returns:
            HTML fragment, or a full page when ``standalone`` is enabled
        """
        body = MarkdownConverter().convert(text)
        if not self.config.output.standalone:
            return body
        return STANDALONE_TEMPLATE.format(
            encoding=self.config.output.encoding,
            title=html.escape(title or "Note"),
            body=body,
        )

    def render_file(self, source: Path) -> Optional[Path]:
        """
        Render a single file.

        Args:
            source: Markdown file

        Returns:
            Path of the written HTML file, or None on failure
        """
        encoding = self.config.output.encoding
        try:
            text = source.read_text(encoding=encoding)
            rendered = self.render_text(text, title=source.stem)
            target = self.output_path_for(source)
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(rendered + "\n", encoding=encoding)
        except (OSError, UnicodeDecodeError) as exc:
            logger.error("Error rendering %s: %s", source, exc)
            return None
        logger.info("Rendered %s -> %s", source, target)
        return target

    def render_all(self, input_paths: List[str]) -> RenderReport:
        """
        Render every note found under the given paths.

        Args:
            input_paths: Files or directories

        Returns:
            Report of rendered and failed files
        """
        report = RenderReport()
        files = self.discover_files(input_paths)
        if not files:
            logger.warning("No note files found.")
            return report

        logger.info("Found %d note file(s) to render", len(files))
        for source in files:
            if self.render_file(source) is not None:
                report.rendered.append(source)
            else:
                report.failed.append(source)
        return report
