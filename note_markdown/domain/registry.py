"""Reference registry for reference-style links and images."""
from typing import Dict, Optional


class LinkRegistry:
    """Maps case-folded reference labels to target URLs and optional titles.

    The registry lives as long as the converter that owns it. Callers that
    reuse one converter across unrelated documents must call ``clear`` in
    between, otherwise definitions leak from one document into the next.
    """

    def __init__(self):
        self.links: Dict[str, str] = {}
        self.titles: Dict[str, str] = {}

    @staticmethod
    def normalize_label(label: str) -> str:
        """Return the lookup key for a label."""
        return label.casefold()

    def define(self, label: str, url: str, title: Optional[str] = None) -> str:
        """
        Register a reference definition.

        Later definitions of the same label replace earlier ones, title
        included.

        Args:
            label: Reference label as written in the document
            url: Target URL
            title: Optional display title

        Returns:
            The normalized key the definition was stored under
        """
        key = self.normalize_label(label)
        self.links[key] = url
        if title is not None:
            self.titles[key] = title
        else:
            self.titles.pop(key, None)
        return key

    def url_for(self, label: str) -> Optional[str]:
        return self.links.get(self.normalize_label(label))

    def title_for(self, label: str) -> Optional[str]:
        return self.titles.get(self.normalize_label(label))

    def clear(self) -> None:
        """Forget every definition."""
        self.links.clear()
        self.titles.clear()

    def __contains__(self, label: object) -> bool:
        if not isinstance(label, str):
            return False
        return self.normalize_label(label) in self.links

    def __len__(self) -> int:
        return len(self.links)
