import argparse
import os
import sys
from typing import Iterator, List, Optional, Tuple

import pdfplumber
import pyperclip

from bionic_reflow import (
    BionicOptions, Page, ReflowConfig, ReflowPipeline, ReflowedDocument, render_document,
)
from bionic_reflow.pipeline import DebugBundle
from bionic_reflow.page_model import pages_from_pdfplumber


class BionicPDFReader:
    """Reflowing bionic reader for text-based academic PDFs"""

    def __init__(self, pdf_path: str):
        self.pdf_path = pdf_path
        self.document: Optional[ReflowedDocument] = None
        self.debug_bundle: Optional[DebugBundle] = None

    def iter_pages(self) -> Iterator[Tuple[int, Page]]:
        """
        Generator yielding (page_num, page) for each page.
        Primary entry point for progress updates.
        """
        with pdfplumber.open(self.pdf_path) as pdf:
            for page in pages_from_pdfplumber(pdf):
                yield page.page_number, page

    def reflow(self, config: Optional[ReflowConfig] = None) -> ReflowedDocument:
        """Extract fragments and reflow them into reading order"""
        cfg = config or ReflowConfig.default()
        pages: List[Page] = []
        for page_num, page in self.iter_pages():
            if cfg.debug:
                print(f"[READER] Page {page_num}: {len(page.fragments)} fragments")
            pages.append(page)

        self.document, self.debug_bundle = ReflowPipeline(cfg).run(pages)
        return self.document

    def to_plain_text(self) -> str:
        """Title, authors, abstract and body separated by blank lines"""
        doc = self.document
        if doc is None:
            return ""
        blocks: List[str] = []
        if doc.title:
            blocks.append(doc.title)
        if doc.authors:
            blocks.append(doc.authors)
        blocks.extend(doc.abstract_paragraphs)
        blocks.extend(doc.body_paragraphs)
        return "\n\n".join(blocks)

    def to_markup(self, options: Optional[BionicOptions] = None) -> str:
        if self.document is None:
            return ""
        return render_document(self.document, options)

    def copy_to_clipboard(self, text: Optional[str] = None) -> bool:
        """Copy text to clipboard"""
        try:
            if text is None:
                text = self.to_plain_text()
            pyperclip.copy(text)
            return True
        except pyperclip.PyperclipException as e:
            print(f"Clipboard error: {e}")
            return False


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='Reflow an academic PDF into bionic reading order')
    parser.add_argument('pdf_path', help='Path to PDF file')
    parser.add_argument('--han-bold', type=float, default=4,
                        help='Han characters bolded per sentence (2-6, default: 4)')
    parser.add_argument('--english-ratio', type=float, default=0.45,
                        help='Share of each English word bolded (0.4-0.5, default: 0.45)')
    parser.add_argument('--markup', action='store_true', help='Print bionic HTML instead of plain text')
    parser.add_argument('--copy', action='store_true', help='Copy the output to the clipboard')
    parser.add_argument('--workers', type=int, default=1, help='Pages processed concurrently')
    parser.add_argument('--debug', action='store_true', help='Print reflow diagnostics')
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    if not os.path.exists(args.pdf_path):
        print(f"Error: File not found: {args.pdf_path}")
        return 1

    reader = BionicPDFReader(args.pdf_path)
    config = ReflowConfig(max_workers=max(1, args.workers), debug=args.debug)

    try:
        reader.reflow(config)
    except Exception as e:
        print(f"Error processing document: {e}")
        return 1

    if args.markup:
        options = BionicOptions(args.han_bold, args.english_ratio).normalized()
        output = reader.to_markup(options)
    else:
        output = reader.to_plain_text()

    print(output)

    if args.debug and reader.debug_bundle is not None:
        print(reader.debug_bundle.summary())

    if args.copy and reader.copy_to_clipboard(output):
        print("Copied to clipboard.")

    return 0


if __name__ == "__main__":
    sys.exit(main())
