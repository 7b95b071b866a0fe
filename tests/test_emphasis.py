import html
import re
import unittest
import sys
import os

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from bionic_reflow.types import FOOTNOTE_MARKER, ReflowedDocument
from bionic_reflow.bionic import (
    BionicOptions,
    bionic_html,
    clamp_chinese_n,
    clamp_english_percent,
    escape_markup,
    render_document,
    render_paragraph,
    split_english_word,
)

STRONG = re.compile(r"<strong>(.*?)</strong>")


def recover_text(markup):
    """Undo bold markers and escaping"""
    return html.unescape(markup.replace("<strong>", "").replace("</strong>", ""))


def bold_han_count(markup):
    return sum(1 for m in STRONG.finditer(markup) if len(m.group(1)) == 1 and ord(m.group(1)) >= 0x4E00)


class TestEnglishWords(unittest.TestCase):
    def test_word_head_is_bold(self):
        self.assertEqual(bionic_html("Hello"), "<strong>Hel</strong>lo")

    def test_head_length(self):
        cases = [
            (1, 0.45, 1),
            (3, 0.4, 2),
            (5, 0.45, 3),
            (10, 0.4, 4),
            (10, 0.5, 5),
            (12, 0.45, 6),
        ]
        for length, percent, expected in cases:
            head, tail = split_english_word("a" * length, percent)
            self.assertEqual(len(head), expected, (length, percent))
            self.assertEqual(len(head) + len(tail), length)

    def test_percent_is_clamped_in_split(self):
        head, _ = split_english_word("abcdefghij", 0.9)
        self.assertEqual(head, "abcde")
        head, _ = split_english_word("abcdefghij", 0.0)
        self.assertEqual(head, "abcd")

    def test_apostrophe_stays_in_word(self):
        self.assertEqual(bionic_html("don't"), "<strong>don</strong>&#39;t")

    def test_sentence(self):
        out = bionic_html("Reading is fun.", BionicOptions(english_bold_percent=0.5))
        self.assertEqual(out, "<strong>Read</strong>ing <strong>i</strong>s <strong>fu</strong>n.")


class TestChineseSentences(unittest.TestCase):
    def test_first_n_han_bolded_per_sentence(self):
        out = bionic_html("我们提出了一种方法。这是", BionicOptions(chinese_bold_n=4))
        self.assertEqual(
            out,
            "<strong>我</strong><strong>们</strong><strong>提</strong><strong>出</strong>"
            "了一种方法。<strong>这</strong><strong>是</strong>",
        )

    def test_at_most_n_per_sentence(self):
        text = "我们提出了一种方法，用于阅读。今天天气很好！"
        out = bionic_html(text, BionicOptions(chinese_bold_n=2))
        self.assertEqual(bold_han_count(out), 6)

    def test_leading_quotes_are_skipped(self):
        self.assertEqual(
            bionic_html("“你好", BionicOptions(chinese_bold_n=2)),
            "“<strong>你</strong><strong>好</strong>",
        )

    def test_non_han_start_consumes_opportunity(self):
        out = bionic_html("“3D打印技术")
        self.assertEqual(out, "“3<strong>D</strong>打印技术")

    def test_english_word_does_not_consume_sentence_start(self):
        out = bionic_html("Deep学习")
        self.assertEqual(out, "<strong>De</strong>ep<strong>学</strong><strong>习</strong>")

    def test_newline_is_boundary(self):
        out = bionic_html("第一行\n第二行", BionicOptions(chinese_bold_n=2))
        self.assertEqual(bold_han_count(out), 4)


class TestMarkupProperties(unittest.TestCase):
    SAMPLES = [
        "Tom & Jerry's <tag> \"quoted\" text.",
        "我们提出了一种方法（PDF reflow），用于“仿生阅读”。",
        "Mixed 中英文 text, with numbers 42 and… ellipsis!",
        "",
    ]

    def test_escaping(self):
        self.assertEqual(bionic_html("a<b"), "<strong>a</strong>&lt;<strong>b</strong>")
        self.assertEqual(escape_markup("&<>\"'"), "&amp;&lt;&gt;&quot;&#39;")

    def test_text_is_recoverable(self):
        for sample in self.SAMPLES:
            self.assertEqual(recover_text(bionic_html(sample)), sample)

    def test_pure(self):
        opts = BionicOptions(chinese_bold_n=3, english_bold_percent=0.42)
        for sample in self.SAMPLES:
            self.assertEqual(bionic_html(sample, opts), bionic_html(sample, opts))


class TestOptions(unittest.TestCase):
    def test_clamp_chinese_n(self):
        self.assertEqual(clamp_chinese_n(4), 4)
        self.assertEqual(clamp_chinese_n(10), 6)
        self.assertEqual(clamp_chinese_n(1), 2)
        self.assertEqual(clamp_chinese_n(3.9), 3)
        self.assertEqual(clamp_chinese_n(float("nan")), 4)
        self.assertEqual(clamp_chinese_n(float("inf")), 4)
        self.assertEqual(clamp_chinese_n("abc"), 4)
        self.assertEqual(clamp_chinese_n(None), 4)

    def test_clamp_english_percent(self):
        self.assertEqual(clamp_english_percent(0.9), 0.5)
        self.assertEqual(clamp_english_percent(0.1), 0.4)
        self.assertEqual(clamp_english_percent(0.42), 0.42)
        self.assertEqual(clamp_english_percent(float("nan")), 0.45)

    def test_out_of_range_options_are_clamped(self):
        opts = BionicOptions(chinese_bold_n=99, english_bold_percent=2.0).normalized()
        self.assertEqual(opts, BionicOptions(6, 0.5))
        out = bionic_html("一二三四五六七八", BionicOptions(chinese_bold_n=99))
        self.assertEqual(bold_han_count(out), 6)

    def test_huge_integers_are_clamped(self):
        self.assertEqual(clamp_chinese_n(10 ** 400), 6)
        self.assertEqual(clamp_chinese_n(-10 ** 400), 2)
        self.assertEqual(clamp_english_percent(10 ** 400), 0.5)
        self.assertEqual(clamp_english_percent(-10 ** 400), 0.4)
        opts = BionicOptions(chinese_bold_n=10 ** 400, english_bold_percent=10 ** 400).normalized()
        self.assertEqual(opts, BionicOptions(6, 0.5))
        out = bionic_html("一二三四五六七八", BionicOptions(chinese_bold_n=10 ** 400))
        self.assertEqual(bold_han_count(out), 6)


class TestRendering(unittest.TestCase):
    def test_marker_paragraph_is_heading(self):
        self.assertEqual(render_paragraph(f" {FOOTNOTE_MARKER} "), f'<h2 class="noteBox">{FOOTNOTE_MARKER}</h2>')

    def test_bracket_note_class(self):
        self.assertTrue(render_paragraph("【注】说明").startswith('<p class="noteBox">'))
        self.assertTrue(render_paragraph("Plain").startswith("<p>"))

    def test_render_document(self):
        doc = ReflowedDocument(
            title="A <Title>",
            authors="Ann",
            abstract_paragraphs=("Short.",),
            body_paragraphs=("Body.", FOOTNOTE_MARKER, "Note."),
        )
        out = render_document(doc)
        self.assertIn("<h1>A &lt;Title&gt;</h1>", out)
        self.assertIn('<p class="authors">Ann</p>', out)
        self.assertIn("<h2>摘要 / Abstract</h2>", out)
        self.assertIn(f'<h2 class="noteBox">{FOOTNOTE_MARKER}</h2>', out)

    def test_render_empty_document(self):
        out = render_document(ReflowedDocument())
        self.assertTrue(out.startswith("<h1>Reading View</h1>"))
        self.assertNotIn("Abstract", out)


if __name__ == "__main__":
    unittest.main()
