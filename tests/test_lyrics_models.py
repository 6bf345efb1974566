import pytest

from waylyrics.lyrics_models import LyricsBundle, LyricsLine, LyricTrack


@pytest.fixture
def abc_track():
    return LyricTrack.from_text("[00:01.000]A\n[00:02.000]B\n[00:03.500]C")


class TestConstruction:
    def test_entries_sorted_by_time(self):
        track = LyricTrack.from_text("[00:09.00]late\n[00:01.00]early\n[00:05.00][00:00.50]mid")
        times = [line.start_time_ms for line in track]
        assert times == sorted(times)
        assert times == [500, 1_000, 5_000, 9_000]

    def test_k_tags_produce_k_entries_with_same_text(self):
        track = LyricTrack.from_text("[00:01.00][00:30.00][01:00.00]hook")
        assert len(track) == 3
        assert {line.words for line in track} == {"hook"}

    def test_equal_timestamps_keep_source_order(self):
        track = LyricTrack.from_text("[00:01.00]first\n[00:01.00]second")
        assert [line.words for line in track] == ["first", "second"]

    def test_empty_transcript(self):
        track = LyricTrack.from_text("")
        assert track.is_empty()
        assert len(track) == 0
        assert not track

    def test_none_transcript_is_empty(self):
        assert LyricTrack.from_text(None).is_empty()

    def test_metadata_only_transcript_is_empty(self):
        track = LyricTrack.from_text("[ar:Artist]\n[ti:Title]\n[by:someone]\nplain text")
        assert track.is_empty()

    def test_lines_are_read_only(self, abc_track):
        assert isinstance(abc_track.lines, tuple)
        with pytest.raises(AttributeError):
            abc_track.lines[0].words = "changed"

    def test_direct_construction_sorts(self):
        track = LyricTrack((LyricsLine(2_000, "b"), LyricsLine(1_000, "a")))
        assert [line.words for line in track] == ["a", "b"]


class TestGetLyric:
    @pytest.mark.parametrize(
        "position_ms, expected",
        [
            (500, None),
            (1_000, None),
            (1_500, "A"),
            (2_000, "A"),
            (2_001, "B"),
            (10_000, "C"),
        ],
    )
    def test_last_line_strictly_before_position(self, abc_track, position_ms, expected):
        assert abc_track.get_lyric(position_ms) == expected

    def test_fractional_position(self, abc_track):
        assert abc_track.get_lyric(2_000.5) == "B"

    def test_basic_query_returns_blank_lines(self):
        track = LyricTrack.from_text("[00:01.000]A\n[00:02.000]   \n[00:03.000]B")
        assert track.get_lyric(2_500) == "   "

    def test_empty_track(self):
        assert LyricTrack.empty().get_lyric(1_000_000) is None

    def test_repeated_advancing_queries(self, abc_track):
        seen = [abc_track.get_lyric(ms) for ms in range(0, 5_000, 200)]
        assert seen == sorted(seen, key=lambda s: "" if s is None else s)
        assert seen[-1] == "C"


class TestGetNoSpaceLyric:
    @pytest.fixture
    def paced_track(self):
        return LyricTrack.from_text("[00:01.000]A\n[00:02.000]   \n[00:03.000]B")

    def test_skips_blank_pacing_line(self, paced_track):
        assert paced_track.get_no_space_lyric(2_500) == "A"

    def test_picks_next_real_line(self, paced_track):
        assert paced_track.get_no_space_lyric(3_500) == "B"

    def test_before_first_line(self, paced_track):
        assert paced_track.get_no_space_lyric(999) is None

    def test_only_blank_lines_passed(self):
        track = LyricTrack.from_text("[00:01.00]\n[00:02.00] \t \n[00:03.00]A")
        assert track.get_no_space_lyric(2_500) is None
        assert track.get_no_space_lyric(3_500) == "A"

    def test_empty_track(self):
        assert LyricTrack().get_no_space_lyric(5_000) is None


class TestLyricsBundle:
    def test_missing_variants_are_empty_tracks(self):
        bundle = LyricsBundle.from_texts("[00:01.00]A", None, None, source="test")
        assert len(bundle.original) == 1
        assert bundle.translated.is_empty()
        assert bundle.phonetic.is_empty()
        assert bundle.source == "test"
        assert not bundle.is_empty()

    def test_default_bundle_is_empty(self):
        bundle = LyricsBundle()
        assert bundle.is_empty()
        assert bundle.original.get_no_space_lyric(1_000) is None
