"""Tests for ContentProcessor and image reference rewriting."""

import pytest
from pathlib import Path

from quiver_publisher.core.processor import (
    ContentProcessor,
    find_image_references,
    rewrite_image_references,
)
from quiver_publisher.core.models import Cell, NoteContext, NoteMetadata, ProcessedNote


class TestFindImageReferences:
    """Tests for the pure image reference matcher."""

    def test_single_reference(self):
        text = "![final-name](quiver-image-url/raw123.png)"

        assert find_image_references(text) == [("final-name", "raw123.png")]

    def test_multiple_references_on_one_line(self):
        text = "![a.png](quiver-image-url/1.png) and ![b.png](quiver-image-url/2.png)"

        assert find_image_references(text) == [("a.png", "1.png"), ("b.png", "2.png")]

    def test_ignores_regular_images(self):
        text = "![logo](https://example.com/logo.png)"

        assert find_image_references(text) == []

    def test_empty_text(self):
        assert find_image_references("") == []

    def test_pattern_lives_on_processor(self):
        match = ContentProcessor.IMAGE_REF_PATTERN.search("x ![alt](quiver-image-url/raw.png) y")

        assert match.groups() == ("alt", "raw.png")


class TestRewriteImageReferences:
    """Tests for the text rewrite and its rename plan."""

    def test_rewrites_name_and_directory(self):
        text, plan = rewrite_image_references(
            "![final-name](quiver-image-url/raw123.png)", "images/quiver"
        )

        assert text == "![final-name](images/quiver/final-name)"
        assert plan == [("raw123.png", "final-name")]

    def test_replaces_every_occurrence_of_raw_name(self):
        source = (
            "![chart.png](quiver-image-url/ABC.png)\n"
            "<img src=\"quiver-image-url/ABC.png\">"
        )

        text, plan = rewrite_image_references(source, "/img")

        assert text == "![chart.png](/img/chart.png)\n<img src=\"/img/chart.png\">"
        assert plan == [("ABC.png", "chart.png")]

    def test_bare_token_rewritten_without_reference(self):
        text, plan = rewrite_image_references("see quiver-image-url/x.png", "images/quiver")

        assert text == "see images/quiver/x.png"
        assert plan == []

    def test_empty_alt_keeps_raw_name(self, capsys):
        text, plan = rewrite_image_references("![](quiver-image-url/raw.png)", "images")

        assert text == "![](images/raw.png)"
        assert plan == []
        assert "no alt text" in capsys.readouterr().out

    def test_plan_keeps_reference_order(self):
        source = "![z.png](quiver-image-url/2.png)\n![y.png](quiver-image-url/1.png)"

        _, plan = rewrite_image_references(source, "images")

        assert plan == [("2.png", "z.png"), ("1.png", "y.png")]


class TestMergeCells:
    """Tests for ContentProcessor.merge_cells."""

    @pytest.fixture
    def processor(self):
        return ContentProcessor(image_path_prefix="images/quiver")

    def test_code_cell(self, processor):
        merged = processor.merge_cells([Cell(kind="code", data="print(1)", language="python")])

        assert merged.text == "{% highlight python %}\nprint(1)\n{% endhighlight %}\n\n"

    def test_markdown_cell(self, processor):
        merged = processor.merge_cells([Cell(kind="markdown", data="# Title")])

        assert merged.text == "# Title\n\n"

    def test_text_cell(self, processor):
        merged = processor.merge_cells([Cell(kind="text", data="<p>*not markdown*</p>")])

        assert merged.text == (
            '<div markdown="0">\n<p>*not markdown*</p>\n<div><br /></div>\n</div>\n\n'
        )

    def test_latex_cell(self, processor):
        merged = processor.merge_cells([Cell(kind="latex", data="e^{i\\pi} + 1 = 0")])

        assert merged.text == "$$\ne^{i\\pi} + 1 = 0\n$$\n\n"

    def test_preserves_cell_order(self, processor):
        cells = [
            Cell(kind="latex", data="x"),
            Cell(kind="markdown", data="second"),
            Cell(kind="code", data="third", language="sh"),
            Cell(kind="markdown", data="fourth"),
        ]

        merged = processor.merge_cells(cells)

        positions = [merged.text.index(s) for s in ("$$\nx", "second", "third", "fourth")]
        assert positions == sorted(positions)

    def test_duplicate_cells_are_kept(self, processor):
        cells = [Cell(kind="markdown", data="same"), Cell(kind="markdown", data="same")]

        merged = processor.merge_cells(cells)

        assert merged.text == "same\n\nsame\n\n"

    def test_unsupported_cell_is_skipped(self, processor, capsys):
        cells = [
            Cell(kind="markdown", data="before"),
            Cell(kind="video", data="movie.mp4"),
            Cell(kind="markdown", data="after"),
        ]

        merged = processor.merge_cells(cells)

        assert merged.text == "before\n\nafter\n\n"
        assert merged.diagnostics == ["Unsupported cell type: video"]
        assert "Unsupported cell type: video" in capsys.readouterr().out

    def test_unsupported_warning_can_be_silenced(self, capsys):
        processor = ContentProcessor(warn_on_unsupported=False)

        merged = processor.merge_cells([Cell(kind="diagram", data="")])

        assert merged.text == ""
        assert merged.diagnostics == ["Unsupported cell type: diagram"]
        assert capsys.readouterr().out == ""

    def test_markdown_images_collected_across_cells(self, processor):
        cells = [
            Cell(kind="markdown", data="![one.png](quiver-image-url/A.png)"),
            Cell(kind="code", data="quiver-image-url stays", language="text"),
            Cell(kind="markdown", data="![two.png](quiver-image-url/B.png)"),
        ]

        merged = processor.merge_cells(cells)

        assert merged.renames == [("A.png", "one.png"), ("B.png", "two.png")]
        assert "![one.png](images/quiver/one.png)" in merged.text
        # Only markdown cells are rewritten
        assert "quiver-image-url stays" in merged.text

    def test_trailing_slash_in_prefix(self):
        processor = ContentProcessor(image_path_prefix="/images/")

        merged = processor.merge_cells([Cell(kind="markdown", data="![a](quiver-image-url/b)")])

        assert merged.text == "![a](/images/a)\n\n"

    def test_empty_cell_list(self, processor):
        merged = processor.merge_cells([])

        assert merged.text == ""
        assert merged.renames == []
        assert merged.diagnostics == []


class TestBuildOutput:
    """Tests for ContentProcessor.build_output."""

    def _processed(self, frontmatter, content):
        meta = NoteMetadata(
            context=NoteContext(path=Path("note.qvnote")),
            title="Title",
            tags=[],
            created_at=0,
        )
        return ProcessedNote(
            metadata=meta,
            content=content,
            frontmatter=frontmatter,
            filename="1970-01-01-title.md",
        )

    def test_frontmatter_then_body(self):
        processor = ContentProcessor()
        processed = self._processed(
            {"title": "Title", "layout": "default", "tags": ["a", "b"]},
            "Body\n\n",
        )

        output = processor.build_output(processed)

        assert output == "---\nlayout: default\ntags:\n- a\n- b\ntitle: Title\n---\nBody\n\n"

    def test_unicode_title_not_escaped(self):
        processor = ContentProcessor()
        processed = self._processed({"title": "Café"}, "")

        output = processor.build_output(processed)

        assert "title: Café\n" in output
