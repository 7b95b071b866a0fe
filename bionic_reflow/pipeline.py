"""
Reflow Pipeline
===============
Single entry point for turning positioned page fragments into a
single-column reading order.
Orchestrates: PageModel -> Regions -> Columns -> Paragraphs -> ReflowedDocument
"""

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import List, Tuple, Optional, Sequence

from .types import (
    ColumnMode, DoubleColumn, Page, ReflowedDocument, SingleColumn, TextLine, median
)
from .script import join_text_pieces
from .page_model import LineConfig, PageModel, build_page_model, pages_from_pdfplumber
from .layout import (
    ColumnConfig, ColumnDetector, FrontMatter, RegionClassifier, RegionConfig,
    order_lines, split_footer,
)
from .paragraphs import ParagraphAssembler, ParagraphConfig


@dataclass
class ReflowConfig:
    """Complete pipeline configuration"""
    # Stage configs
    line_config: LineConfig = field(default_factory=LineConfig)
    region_config: RegionConfig = field(default_factory=RegionConfig)
    column_config: ColumnConfig = field(default_factory=ColumnConfig)
    paragraph_config: ParagraphConfig = field(default_factory=ParagraphConfig)

    # Body band (page-height shares, exclusive)
    body_top: float = 0.12
    body_bottom: float = 0.9

    # Only this page contributes title/authors/abstract
    front_matter_page: int = 1

    # Pages run concurrently when > 1; output still follows page number
    max_workers: int = 1

    # Debug
    debug: bool = False

    @classmethod
    def default(cls) -> 'ReflowConfig':
        return cls()

    @classmethod
    def parallel(cls, max_workers: int = 4) -> 'ReflowConfig':
        """Process independent pages on a thread pool"""
        return cls(max_workers=max(1, max_workers))


@dataclass
class PageStats:
    """Per-page statistics for debugging"""
    page_number: int = 0
    lines_total: int = 0
    footer_lines: int = 0
    body_lines: int = 0
    clustering_lines: int = 0
    wide_lines: int = 0
    mode: str = "single"
    x_min_min: float = 0.0
    x_min_median: float = 0.0
    x_min_max: float = 0.0

    def summary(self) -> str:
        return (
            f"Page {self.page_number}: lines={self.lines_total} "
            f"(footer={self.footer_lines}, body={self.body_lines}) | "
            f"clustering={self.clustering_lines} wide={self.wide_lines} | "
            f"mode={self.mode} | "
            f"xMin(min={self.x_min_min:.1f}, median={self.x_min_median:.1f}, max={self.x_min_max:.1f})"
        )


@dataclass
class DebugBundle:
    """Debug information from pipeline run"""
    pages_processed: int = 0
    title_lines: int = 0
    author_lines: int = 0
    abstract_lines: int = 0
    body_paragraphs: int = 0
    pages_double_column: List[int] = field(default_factory=list)
    pages_with_footnotes: List[int] = field(default_factory=list)
    page_stats: List[PageStats] = field(default_factory=list)

    def summary(self) -> str:
        """Generate summary string"""
        lines = [
            "=" * 60,
            "REFLOW ENGINE DEBUG SUMMARY",
            "=" * 60,
            f"Pages Processed: {self.pages_processed}",
            f"Title Lines: {self.title_lines}",
            f"Author Lines: {self.author_lines}",
            f"Abstract Lines: {self.abstract_lines}",
            f"Body Paragraphs: {self.body_paragraphs}",
            f"Double-Column Pages: {self.pages_double_column}",
            f"Pages with Footnotes: {self.pages_with_footnotes}",
        ]
        if self.page_stats:
            lines.append("")
            lines.append("Per-Page Stats (first 10):")
            for stat in self.page_stats[:10]:
                lines.append(f"  {stat.summary()}")
        lines.append("=" * 60)
        return "\n".join(lines)


@dataclass
class PageResult:
    """Everything one page contributes to the document"""
    page_number: int
    front_matter: Optional[FrontMatter] = None
    body_paragraphs: List[str] = field(default_factory=list)
    footnote_paragraphs: List[str] = field(default_factory=list)
    stats: PageStats = field(default_factory=PageStats)


def _mode_name(mode: ColumnMode) -> str:
    if isinstance(mode, DoubleColumn):
        return f"double(split={mode.split_x:.1f})"
    if isinstance(mode, SingleColumn):
        return "single"
    raise TypeError(f"Unknown column mode: {mode!r}")


class ReflowPipeline:
    """
    Main reflow pipeline.

    Usage:
        pipeline = ReflowPipeline()
        doc, debug = pipeline.run(pages)
    """

    def __init__(self, config: Optional[ReflowConfig] = None):
        self.config = config or ReflowConfig.default()

        # Initialize components
        self.region_classifier = RegionClassifier(self.config.region_config)
        self.column_detector = ColumnDetector(self.config.column_config)
        self.assembler = ParagraphAssembler(self.config.paragraph_config)

    def run(self, pages: Sequence[Page]) -> Tuple[ReflowedDocument, DebugBundle]:
        """
        Run the pipeline over a document's pages.

        Args:
            pages: Pages in any order; output follows ascending page number

        Returns:
            Tuple of (reflowed_document, debug_bundle)
        """
        debug = DebugBundle()
        ordered = sorted(pages, key=lambda p: p.page_number)

        results = self._process_pages(ordered)

        title_lines: List[TextLine] = []
        author_lines: List[TextLine] = []
        abstract_lines: List[TextLine] = []
        body: List[str] = []

        for res in results:
            if res.front_matter is not None:
                title_lines.extend(res.front_matter.title_lines)
                author_lines.extend(res.front_matter.author_lines)
                abstract_lines.extend(res.front_matter.abstract_lines)

            body.extend(res.body_paragraphs)
            body.extend(res.footnote_paragraphs)

            debug.page_stats.append(res.stats)
            if res.stats.mode != "single":
                debug.pages_double_column.append(res.page_number)
            if res.footnote_paragraphs:
                debug.pages_with_footnotes.append(res.page_number)

        abstract: List[str] = []
        if abstract_lines:
            abstract = self.assembler.assemble(sorted(abstract_lines, key=lambda ln: ln.y))

        doc = ReflowedDocument(
            title=join_text_pieces(ln.text for ln in title_lines) if title_lines else None,
            authors=join_text_pieces(ln.text for ln in author_lines) if author_lines else None,
            abstract_paragraphs=tuple(abstract),
            body_paragraphs=tuple(body),
        )

        debug.pages_processed = len(results)
        debug.title_lines = len(title_lines)
        debug.author_lines = len(author_lines)
        debug.abstract_lines = len(abstract_lines)
        debug.body_paragraphs = len(body)

        if self.config.debug:
            print(f"[REFLOW] Pages: {debug.pages_processed}")
            print(f"[REFLOW] Title lines: {debug.title_lines}, author lines: {debug.author_lines}")
            print(f"[REFLOW] Abstract paragraphs: {len(abstract)}, body paragraphs: {len(body)}")

        return doc, debug

    def _process_pages(self, pages: List[Page]) -> List[PageResult]:
        """Process pages, concurrently when configured; result order follows input"""
        if self.config.max_workers <= 1 or len(pages) <= 1:
            return [self.process_page(p) for p in pages]

        with ThreadPoolExecutor(max_workers=self.config.max_workers) as pool:
            return list(pool.map(self.process_page, pages))

    def process_page(self, page: Page) -> PageResult:
        """
        Reflow a single page.

        Depends only on the page itself; the front-matter page also yields
        its title/author/abstract lines.
        """
        cfg = self.config
        result = PageResult(page_number=page.page_number)
        result.stats.page_number = page.page_number

        model = build_page_model(page, cfg.line_config)
        result.stats.lines_total = len(model.lines)
        if not model.lines or model.height <= 0:
            return result

        med_h = model.median_line_height
        footer, non_footer = split_footer(model.lines, model.height, med_h, cfg.region_config)
        result.stats.footer_lines = len(footer)

        if page.page_number == cfg.front_matter_page:
            front = self.region_classifier.classify(non_footer, model.height, med_h)
            result.front_matter = front
            non_footer = [ln for ln in non_footer if ln not in front.consumed]

        body_lines = [
            ln for ln in non_footer
            if cfg.body_top < model.normalized_y(ln) < cfg.body_bottom
        ]
        result.stats.body_lines = len(body_lines)

        mode = self.column_detector.detect(body_lines, model.width)
        result.stats.mode = _mode_name(mode)
        self._collect_column_stats(result.stats, body_lines, model)

        result.body_paragraphs = self.assembler.assemble(order_lines(body_lines, mode))
        result.footnote_paragraphs = self.assembler.assemble_footnotes(footer)

        if cfg.debug:
            print(f"[REFLOW][page {page.page_number}] {result.stats.summary()}")

        return result

    def _collect_column_stats(self, stats: PageStats, body_lines: List[TextLine], model: PageModel):
        sample = self.column_detector.clustering_sample(body_lines, model.width)
        xs = sorted(ln.x_min for ln in sample)
        stats.clustering_lines = len(sample)
        if model.width > 0:
            stats.wide_lines = sum(
                1 for ln in body_lines
                if ln.width / model.width > self.config.column_config.wide_line_ratio
            )
        if xs:
            stats.x_min_min = xs[0]
            stats.x_min_median = median(xs)
            stats.x_min_max = xs[-1]


def reflow_pages(
    pages: Sequence[Page],
    config: Optional[ReflowConfig] = None
) -> ReflowedDocument:
    """
    Convenience function: reflow pages and drop the debug bundle.
    """
    doc, _ = ReflowPipeline(config).run(pages)
    return doc


def run_reflow_pipeline(
    pdf_path: str,
    config: Optional[ReflowConfig] = None
) -> Tuple[ReflowedDocument, DebugBundle]:
    """
    Single entry point for running the pipeline on a PDF path.
    """
    import pdfplumber

    cfg = config or ReflowConfig.default()

    with pdfplumber.open(pdf_path) as pdf:
        pages = list(pages_from_pdfplumber(pdf))

    if cfg.debug:
        print(f"[REFLOW] Loaded {len(pages)} pages from {pdf_path}")

    return ReflowPipeline(cfg).run(pages)
