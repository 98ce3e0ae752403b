"""
Tests for RtttlParser.

Covers the three-part split, control pairs in both sections, note tokens
with optional duration/dot/octave, running defaults and error reporting.
"""
import pytest

from ringtone import (parse, Duration, Note, RtttlParser, RtttlError, DelimiterCountError,
                      MalformedControlPair, UnrecognizedControlName, InvalidControlValue,
                      MalformedNoteToken, UnknownNote, InvalidDurationError)


class TestSections:

    def test_contains_spaces(self):
        assert len(parse("a:d=4:c6, d6").tones) == 2

    def test_spaces_in_control_section(self):
        seq = parse("a: d = 8 , o = 5 :c")
        assert seq.default_duration is Duration.EIGHTH
        assert seq.default_octave == 5

    def test_empty_control_section_uses_defaults(self):
        seq = parse("name::c,d,e")
        assert seq.default_octave == 6
        assert seq.default_duration is Duration.QUARTER
        assert seq.beats_per_minute == 63
        assert [tone.note for tone in seq.tones] == [Note.C6, Note.D6, Note.E6]

    def test_empty_tone_section(self):
        seq = parse("quiet:b=90:")
        assert seq.tones == ()
        assert seq.beats_per_minute == 90

    def test_name_is_kept_verbatim(self):
        assert parse(" My Tune! :d=8:c").name == " My Tune! "

    def test_empty_control_tokens_are_skipped(self):
        seq = parse("x:,d=8,,:c,d")
        assert seq.default_duration is Duration.EIGHTH
        assert len(seq.tones) == 2

    @pytest.mark.parametrize("text", ["x::c,d,", "x::c,d,,", "x::c,d, "])
    def test_trailing_tone_commas_are_skipped(self, text):
        assert [tone.note for tone in parse(text).tones] == [Note.C6, Note.D6]

    def test_blank_tone_section(self):
        assert parse("x: :  ").tones == ()

    @pytest.mark.parametrize("text, offset", [("x::c,,d", 5), ("x::,c", 3), ("x::c, ,d", 6)])
    def test_empty_tone_between_commas(self, text, offset):
        with pytest.raises(MalformedNoteToken) as excinfo:
            parse(text)
        assert excinfo.value.fragment == ""
        assert excinfo.value.offset == offset

    def test_class_and_function_agree(self):
        text = "Beep:o=5,d=8,b=120:c,e,g"
        assert RtttlParser.parse(text) == parse(text)

    @pytest.mark.parametrize("text, found", [
        ("a:b", 1),
        ("a:b:c:d", 3),
        ("no colons", 0),
    ])
    def test_delimiter_count(self, text, found):
        with pytest.raises(DelimiterCountError) as excinfo:
            parse(text)
        assert f"found {found}" in str(excinfo.value)


class TestControlPairs:

    def test_all_control_pairs(self):
        seq = parse("x:o=5,d=16,b=200:c")
        assert seq.default_octave == 5
        assert seq.default_duration is Duration.SIXTEENTH
        assert seq.beats_per_minute == 200
        assert seq.tones[0].note is Note.C5
        assert seq.tones[0].duration is Duration.SIXTEENTH

    @pytest.mark.parametrize("text", ["a:b:c", "a:oc=3:c", "a:o==3:c", "a:=3:c", "a:o=3=4:c"])
    def test_malformed_control_pair(self, text):
        with pytest.raises(MalformedControlPair):
            parse(text)

    @pytest.mark.parametrize("text", ["a:z=3:c", "a:O=3:c", "a::c,z=1"])
    def test_unrecognized_control_name(self, text):
        with pytest.raises(UnrecognizedControlName):
            parse(text)

    @pytest.mark.parametrize("text", ["a:o=a:c", "a:b=:c", "a:d=3:c", "a:d=64:c", "a:o=9:c",
                                      "a:o=-1:c", "a:b=0:c", "a:b=1.5:c"])
    def test_invalid_control_value(self, text):
        with pytest.raises(InvalidControlValue):
            parse(text)

    def test_out_of_range_value_is_rejected_when_applied(self):
        with pytest.raises(InvalidControlValue) as excinfo:
            parse("x::o=9,o=5,c")
        assert excinfo.value.fragment == "o=9"
        assert excinfo.value.offset == 3

    def test_invalid_duration_control_chains_cause(self):
        with pytest.raises(InvalidControlValue) as excinfo:
            parse("a:d=3:c")
        assert isinstance(excinfo.value.__cause__, InvalidDurationError)


class TestRunningDefaults:

    def test_control_pairs_in_notes(self):
        seq = parse("name:o=3:a,b,c,o=4,d,e,p,f")
        notes = [tone.note for tone in seq.tones]
        assert notes == [Note.A3, Note.B3, Note.C3, Note.D4, Note.E4, None, Note.F4]
        assert [n.octave if n else None for n in notes] == [3, 3, 3, 4, 4, None, 4]
        assert seq.tones[5].is_rest

    def test_final_state_becomes_sequence_default(self):
        seq = parse("name:o=3:a,b,c,o=4,d,e,p,f")
        assert seq.default_octave == 4

    def test_mid_sequence_duration_change_is_not_retroactive(self):
        seq = parse("x:d=4:c,d=8,c,4c")
        assert [tone.duration for tone in seq.tones] == [Duration.QUARTER, Duration.EIGHTH, Duration.QUARTER]
        assert seq.default_duration is Duration.EIGHTH

    def test_mid_sequence_tempo(self):
        assert parse("x:b=100:c,b=120,d").beats_per_minute == 120


class TestNotes:

    def test_duration(self):
        seq = parse("name:b=60:a,1a,2a,4a,8a,16a,32a,1a.,2a.,4a.")
        assert seq.tone_seconds() == pytest.approx([1.0, 4.0, 2.0, 1.0, 0.5, 0.25, 0.125, 6.0, 3.0, 1.5])

    def test_octave(self):
        seq = parse("name:b=60:a,a1,a2,a3,a4,a5,a6,a7")
        assert [tone.note.octave for tone in seq.tones] == [6, 1, 2, 3, 4, 5, 6, 7]

    def test_octave_zero_and_eight(self):
        seq = parse("x::c0,b8")
        assert [tone.note for tone in seq.tones] == [Note.C0, Note.B8]

    def test_sharps(self):
        seq = parse("x:o=4:c#,f#5,8a#")
        assert [tone.note for tone in seq.tones] == [Note.CS4, Note.FS5, Note.AS4]

    def test_pitch_letters_are_case_insensitive(self):
        seq = parse("x:o=5:C,D#,P,8G4")
        assert [tone.note for tone in seq.tones] == [Note.C5, Note.DS5, None, Note.G4]

    @pytest.mark.parametrize("token", ["c.5", "c5.", ".c5", "4c.5", "4.c5"])
    def test_dot_anywhere(self, token):
        seq = parse(f"x::{token}")
        assert seq.tones[0].note is Note.C5
        assert seq.tones[0].duration is Duration.DOTTED_QUARTER

    def test_dotted_rest(self):
        tone = parse("x::8p.").tones[0]
        assert tone.is_rest
        assert tone.duration is Duration.DOTTED_EIGHTH

    def test_invalid_duration(self):
        with pytest.raises(InvalidDurationError):
            parse("name:b=60:34a")

    @pytest.mark.parametrize("token", ["h", "c10", "123c", "c..5", "x", "c-5", "#c", "cc"])
    def test_malformed_note(self, token):
        with pytest.raises(MalformedNoteToken):
            parse(f"x::{token}")

    @pytest.mark.parametrize("token", ["e#5", "b#", "c9", "p#"])
    def test_unknown_note(self, token):
        with pytest.raises(UnknownNote):
            parse(f"x::{token}")


class TestErrorReporting:

    def test_every_error_is_an_rtttl_error(self):
        for text in ["a:b", "a:b:c", "a:z=1:c", "a:o=x:c", "a::h", "a::e#", "a::3c"]:
            with pytest.raises(RtttlError):
                parse(text)
            with pytest.raises(ValueError):
                parse(text)

    def test_fragment_and_offset(self):
        text = "x:d=4:c,zz"
        with pytest.raises(MalformedNoteToken) as excinfo:
            parse(text)
        error = excinfo.value
        assert error.fragment == "zz"
        assert error.offset == 8
        assert text[error.offset:error.offset + 2] == "zz"
        assert "zz" in str(error)

    def test_offset_skips_leading_spaces(self):
        text = "x:d=4:c,  zz"
        with pytest.raises(MalformedNoteToken) as excinfo:
            parse(text)
        assert excinfo.value.offset == text.index("zz")

    def test_control_section_offset(self):
        text = "tune:o=5,q=3:c"
        with pytest.raises(UnrecognizedControlName) as excinfo:
            parse(text)
        assert excinfo.value.fragment == "q=3"
        assert excinfo.value.offset == text.index("q=3")
