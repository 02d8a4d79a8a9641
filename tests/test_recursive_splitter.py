"""Tests for chunking.recursive_splitter."""

import pytest

from chunking import DEFAULT_SEPARATORS, RecursiveCharacterTextSplitter


TWO_PARAGRAPHS = "First paragraph is here.\n\nSecond paragraph is here."


class TestBasicSplitting:
    def test_empty_string(self):
        assert RecursiveCharacterTextSplitter(chunk_size=10).split_text("") == []

    def test_whitespace_only(self):
        assert RecursiveCharacterTextSplitter(chunk_size=10).split_text(" \n\n ") == []

    def test_short_text_single_chunk(self):
        splitter = RecursiveCharacterTextSplitter(chunk_size=100)
        assert splitter.split_text("  Kurzer Text.  ") == ["Kurzer Text."]

    def test_paragraphs_without_overlap(self):
        splitter = RecursiveCharacterTextSplitter(chunk_size=50)
        assert splitter.split_text(TWO_PARAGRAPHS) == [
            "First paragraph is here.",
            "Second paragraph is here.",
        ]

    def test_paragraphs_with_overlap(self):
        splitter = RecursiveCharacterTextSplitter(chunk_size=50, chunk_overlap=10)
        chunks = splitter.split_text(TWO_PARAGRAPHS)
        assert chunks == [
            "First paragraph is here.",
            "h is here.\n\nSecond paragraph is here.",
        ]

    def test_small_paragraphs_are_merged(self):
        splitter = RecursiveCharacterTextSplitter(chunk_size=20)
        chunks = splitter.split_text("One.\n\nTwo.\n\nThree is longer.")
        assert chunks == ["One.\n\nTwo.", "Three is longer."]


class TestSeparatorPriority:
    def test_latin_sentences(self):
        splitter = RecursiveCharacterTextSplitter(chunk_size=30)
        chunks = splitter.split_text("One sentence here. Another one follows. And a third.")
        assert chunks == ["One sentence here.", "Another one follows.", "And a third."]

    def test_chinese_sentences_keep_punctuation(self):
        splitter = RecursiveCharacterTextSplitter(chunk_size=10)
        chunks = splitter.split_text("今天天气很好。我们去公园吧！")
        assert chunks == ["今天天气很好。", "我们去公园吧！"]

    def test_falls_back_to_characters(self):
        splitter = RecursiveCharacterTextSplitter(chunk_size=10)
        chunks = splitter.split_text("abcdefghijklmnopqrstuvwxyz")
        assert chunks == ["abcdefghij", "klmnopqrst", "uvwxyz"]

    def test_character_fallback_with_overlap(self):
        splitter = RecursiveCharacterTextSplitter(chunk_size=10, chunk_overlap=2)
        chunks = splitter.split_text("abcdefghijklmnopqrstuvwxyz")
        assert chunks == ["abcdefghij", "ijklmnopqr", "qrstuvwxyz"]

    def test_oversized_paragraph_is_split_further(self):
        text = "Tiny.\n\nThis paragraph is much longer, it needs a second split."
        splitter = RecursiveCharacterTextSplitter(chunk_size=30)
        chunks = splitter.split_text(text)
        assert chunks[0] == "Tiny."
        assert all(len(c) <= 30 for c in chunks)
        assert "".join(chunks).replace(" ", "") == text.replace(" ", "").replace("\n", "")


class TestNestedOverlap:
    THESIS = (
        "Die Bachelorarbeit umfasst 12 Leistungspunkte. "
        "Sie wird im sechsten Semester geschrieben! "
        "Wann beginnt die Anmeldung?"
    )

    def test_overlap_applied_once_per_level(self):
        splitter = RecursiveCharacterTextSplitter(chunk_size=40, chunk_overlap=10)
        assert splitter.split_text(self.THESIS) == [
            "Die Bachelorarbeit umfasst 12",
            "umfasst 12 Leistungspunkte.",
            "Sie wird im sechsten Semester",
            "n Semester geschrieben!",
            "Wann beginnt die Anmeldung?",
        ]

    @pytest.mark.parametrize("chunk_size,chunk_overlap", [(12, 4), (40, 10), (80, 30)])
    def test_chunks_are_slices_of_the_text_in_order(self, sample_text, chunk_size, chunk_overlap):
        compact_text = sample_text.replace(" ", "").replace("\n", "")
        splitter = RecursiveCharacterTextSplitter(chunk_size=chunk_size, chunk_overlap=chunk_overlap)

        position = 0
        for chunk in splitter.split_text(sample_text):
            compact_chunk = chunk.replace(" ", "").replace("\n", "")
            found = compact_text.find(compact_chunk, max(0, position - chunk_size))
            assert found != -1, chunk
            assert found >= max(0, position - chunk_size)
            position = found + len(compact_chunk)
        assert position == len(compact_text)


class TestConfiguration:
    def test_default_separators(self):
        splitter = RecursiveCharacterTextSplitter(chunk_size=10)
        assert splitter.separators == list(DEFAULT_SEPARATORS)
        assert DEFAULT_SEPARATORS[0] == "\n\n"
        assert DEFAULT_SEPARATORS[-1] == ""

    def test_empty_separator_list_raises(self):
        with pytest.raises(ValueError, match="separators"):
            RecursiveCharacterTextSplitter(chunk_size=10, separators=[])

    def test_overlap_equal_to_size_raises(self):
        with pytest.raises(ValueError):
            RecursiveCharacterTextSplitter(chunk_size=10, chunk_overlap=10)

    def test_custom_separators(self):
        splitter = RecursiveCharacterTextSplitter(chunk_size=10, separators=["|"])
        chunks = splitter.split_text("aaaa|bbbb|cccccccccc")
        assert chunks == ["aaaa|", "bbbb|", "cccccccccc"]

    def test_only_empty_separator_cuts_raw(self):
        splitter = RecursiveCharacterTextSplitter(chunk_size=4, separators=[""])
        assert splitter.split_text("ab cd ef") == ["ab c", "d ef"]
