import unittest
import sys
import os

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from bionic_reflow.types import FOOTNOTE_MARKER, TextLine
from bionic_reflow.paragraphs import ParagraphAssembler, ParagraphConfig, join_line, lines_to_paragraphs


def line(text, y, height=12.0):
    return TextLine(y=y, x_min=50.0, x_max=300.0, height=height, text=text)


class TestParagraphAssembler(unittest.TestCase):
    def setUp(self):
        self.assembler = ParagraphAssembler()

    def test_hyphenation_repair(self):
        paras = self.assembler.assemble([line("exam-", 100), line("ple text", 112)])
        self.assertEqual(paras, ["example text"])

    def test_no_hyphen_keeps_space(self):
        paras = self.assembler.assemble([line("exam ", 100), line("ple text", 112)])
        self.assertEqual(paras, ["exam ple text"])

    def test_hyphen_before_digit_is_kept(self):
        paras = self.assembler.assemble([line("COVID-", 100), line("19 cases", 112)])
        self.assertEqual(paras, ["COVID-19 cases"])

    def test_han_lines_join_without_space(self):
        paras = self.assembler.assemble([line("我们提出了一种", 100), line("新的方法。", 112)])
        self.assertEqual(paras, ["我们提出了一种新的方法。"])

    def test_large_gap_starts_new_paragraph(self):
        lines = [
            line("First paragraph", 100),
            line("continues here", 112),
            line("more text", 124),
            line("Second paragraph", 160),
            line("ends.", 172),
        ]
        paras = self.assembler.assemble(lines)
        self.assertEqual(paras, ["First paragraph continues here more text", "Second paragraph ends."])

    def test_input_order_is_kept(self):
        # Right column follows left column even though its y restarts
        lines = [line("L1", 100), line("L2", 112), line("R1", 106), line("R2", 118)]
        self.assertEqual(self.assembler.assemble(lines), ["L1 L2 R1 R2"])

    def test_empty_and_blank(self):
        self.assertEqual(self.assembler.assemble([]), [])
        self.assertEqual(self.assembler.typical_gap([line("only", 100)]), 10.0)

    def test_custom_break_ratio(self):
        assembler = ParagraphAssembler(ParagraphConfig(break_gap_ratio=3.0))
        lines = [line("a", 100), line("b", 112), line("c", 124), line("d", 154)]
        self.assertEqual(assembler.assemble(lines), ["a b c d"])

    def test_footnotes_get_marker(self):
        notes = self.assembler.assemble_footnotes([line("2 Second note", 780), line("1 First note", 760)])
        self.assertEqual(notes[0], FOOTNOTE_MARKER)
        self.assertEqual(notes[1:], ["1 First note 2 Second note"])
        self.assertEqual(self.assembler.assemble_footnotes([]), [])


class TestJoinHelpers(unittest.TestCase):
    def test_join_line(self):
        self.assertEqual(join_line("", "start"), "start")
        self.assertEqual(join_line("well-", "known"), "wellknown")
        self.assertEqual(join_line("range:", "A"), "range:A")

    def test_lines_to_paragraphs_sorts_by_y(self):
        self.assertEqual(lines_to_paragraphs([line("second", 112), line("first", 100)]), ["first second"])


if __name__ == "__main__":
    unittest.main()
