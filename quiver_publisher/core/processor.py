"""Content processor for merging Quiver cells into a Markdown body."""

import re
from typing import Callable, Dict, List, Tuple

import yaml

from quiver_publisher.core.models import Cell, MergedBody, ProcessedNote, RenamePlan

# Placeholder Quiver uses for the note's resources directory
IMAGE_URL_TOKEN = "quiver-image-url"


def find_image_references(text: str) -> List[Tuple[str, str]]:
    """Find Quiver image references in markdown text.

    Args:
        text: Markdown cell data

    Returns:
        List of (alt, raw_name) pairs in order of appearance
    """
    pattern = ContentProcessor.IMAGE_REF_PATTERN
    return [(m.group(1), m.group(2)) for m in pattern.finditer(text)]


def rewrite_image_references(text: str, image_dir: str) -> Tuple[str, RenamePlan]:
    """Point Quiver image references at their alt-text filenames.

    Every occurrence of a referenced raw name is replaced by its alt text,
    then the remaining url token is replaced by ``image_dir``. Nothing on
    disk is touched; the returned plan lists the renames the image directory
    needs to match the new text.

    Args:
        text: Markdown cell data
        image_dir: Logical image directory used in output links

    Returns:
        Tuple of (rewritten text, list of (raw_name, alt) renames)
    """
    plan: RenamePlan = []
    for alt, raw_name in find_image_references(text):
        if not alt:
            print(f"Warning: Image {raw_name} has no alt text, keeping its name")
            continue
        text = text.replace(raw_name, alt)
        plan.append((raw_name, alt))

    return text.replace(IMAGE_URL_TOKEN, image_dir), plan


class ContentProcessor:
    """Merges a note's cells into one Markdown body.

    Handles:
    - Code cells as highlight blocks
    - Markdown cells with image reference rewriting
    - Text (HTML) cells as raw blocks
    - LaTeX cells as display math
    """

    # Pattern for Quiver image references: ![alt](quiver-image-url/raw-name)
    IMAGE_REF_PATTERN = re.compile(r'!\[([^\]]*)\]\(' + re.escape(IMAGE_URL_TOKEN) + r'/([^)\s]+)\)')

    def __init__(
        self,
        image_path_prefix: str = "images/quiver",
        warn_on_unsupported: bool = True,
    ):
        """Initialize ContentProcessor.

        Args:
            image_path_prefix: Image directory written into output links
            warn_on_unsupported: Whether to print a warning for unknown cell kinds
        """
        self.image_path_prefix = image_path_prefix.rstrip('/')
        self.warn_on_unsupported = warn_on_unsupported
        self._renderers: Dict[str, Callable[[Cell, RenamePlan], str]] = {
            'code': self._render_code,
            'markdown': self._render_markdown,
            'text': self._render_text,
            'latex': self._render_latex,
        }

    def merge_cells(self, cells: List[Cell]) -> MergedBody:
        """Merge cells in order, each followed by a blank line.

        Args:
            cells: Cells from content.json

        Returns:
            MergedBody with text, image renames and diagnostics
        """
        parts: List[str] = []
        renames: RenamePlan = []
        diagnostics: List[str] = []

        for cell in cells:
            render = self._renderers.get(cell.kind)
            if render is None:
                message = f"Unsupported cell type: {cell.kind}"
                if self.warn_on_unsupported:
                    print(f"Warning: {message}")
                diagnostics.append(message)
                continue
            parts.append(render(cell, renames) + "\n")

        return MergedBody(text="".join(parts), renames=renames, diagnostics=diagnostics)

    def _render_code(self, cell: Cell, renames: RenamePlan) -> str:
        language = cell.language or ''
        return f"{{% highlight {language} %}}\n{cell.data}\n{{% endhighlight %}}\n"

    def _render_markdown(self, cell: Cell, renames: RenamePlan) -> str:
        text, plan = rewrite_image_references(cell.data, self.image_path_prefix)
        renames.extend(plan)
        return f"{text}\n"

    def _render_text(self, cell: Cell, renames: RenamePlan) -> str:
        # markdown="0" stops kramdown from parsing the HTML
        return f'<div markdown="0">\n{cell.data}\n<div><br /></div>\n</div>\n'

    def _render_latex(self, cell: Cell, renames: RenamePlan) -> str:
        return f"$$\n{cell.data}\n$$\n"

    def build_output(self, processed: ProcessedNote) -> str:
        """Build final markdown output with frontmatter.

        Args:
            processed: Processed note

        Returns:
            Complete markdown string with YAML frontmatter
        """
        frontmatter_str = yaml.dump(
            processed.frontmatter,
            default_flow_style=False,
            allow_unicode=True,
            sort_keys=True,
        )
        return f"---\n{frontmatter_str}---\n{processed.content}"
