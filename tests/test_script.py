import unittest
import sys
import os

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from bionic_reflow.script import (
    is_han,
    is_sentence_boundary,
    is_sentence_start_skip,
    needs_space_between,
    join_text_pieces,
    ends_with_hyphen,
    starts_with_letter,
)


class TestScriptPredicates(unittest.TestCase):
    def test_is_han(self):
        self.assertTrue(is_han("中"))
        self.assertTrue(is_han("〇"))
        self.assertTrue(is_han("\U00020000"))  # Extension B
        self.assertTrue(is_han("\U00031350"))  # Extension H
        self.assertTrue(is_han("\U0002EBF0"))  # Extension I
        self.assertTrue(is_han("\U00016FE3"))
        self.assertTrue(is_han("\U00016FF1"))
        self.assertFalse(is_han("\U00016FE4"))
        self.assertFalse(is_han("a"))
        self.assertFalse(is_han("。"))
        self.assertFalse(is_han("か"))  # Hiragana is not Han
        self.assertFalse(is_han("中文"))

    def test_boundary_and_skip_sets(self):
        for ch in "。！？；：，、.!?;:,\n":
            self.assertTrue(is_sentence_boundary(ch), ch)
        self.assertFalse(is_sentence_boundary("-"))
        for ch in ["“", "「", "【", "（", "—", "·", "…", " ", "　"]:
            self.assertTrue(is_sentence_start_skip(ch), ch)
        self.assertFalse(is_sentence_start_skip("中"))

    def test_hyphen_and_letter(self):
        self.assertTrue(ends_with_hyphen("exam-"))
        self.assertTrue(ends_with_hyphen("exam– "))
        self.assertFalse(ends_with_hyphen("exam"))
        self.assertFalse(ends_with_hyphen(""))
        self.assertTrue(starts_with_letter("  ple"))
        self.assertFalse(starts_with_letter("1st"))
        self.assertFalse(starts_with_letter("中文"))


class TestSpacingRule(unittest.TestCase):
    def test_latin_words_get_space(self):
        self.assertTrue(needs_space_between("Hello", "world"))
        self.assertTrue(needs_space_between("page", "12"))

    def test_no_space_around_han(self):
        self.assertFalse(needs_space_between("中文", "text"))
        self.assertFalse(needs_space_between("text", "中文"))

    def test_no_space_around_brackets_and_hyphens(self):
        self.assertFalse(needs_space_between("see", "(Fig"))
        self.assertFalse(needs_space_between("Fig. 1)", "shows"))
        self.assertFalse(needs_space_between("co-", "operate"))

    def test_no_space_after_punctuation(self):
        # Only Latin letters/digits on both sides earn a space
        self.assertFalse(needs_space_between("end.", "Next"))
        self.assertFalse(needs_space_between("a", ",b"))

    def test_empty_pieces(self):
        self.assertFalse(needs_space_between("", "word"))
        self.assertFalse(needs_space_between("word", "   "))

    def test_join_text_pieces(self):
        self.assertEqual(join_text_pieces(["Deep", "learning", "for", "PDFs"]), "Deep learning for PDFs")
        self.assertEqual(join_text_pieces(["深度", "学习", "方法"]), "深度学习方法")
        self.assertEqual(join_text_pieces(["基于", "BERT", "的模型"]), "基于BERT的模型")
        self.assertEqual(join_text_pieces([]), "")


if __name__ == "__main__":
    unittest.main()
