import pytest
from pydantic import ValidationError

from identicon.render.sdk import (
    MIN_HASH_LENGTH,
    InvalidProfile,
    Profile,
    name_digest,
)

from conftest import BASE_DIGEST


class TestProfileFromName:
    """Building profiles from a contact name."""

    def test_md5_of_name(self):
        profile = Profile.from_name("a")
        assert profile.digest == BASE_DIGEST

    def test_whitespace_is_normalized(self):
        profile = Profile.from_name("  Ann   Lee ")
        assert profile.full_name == "Ann Lee"
        assert profile.name_parts == ("Ann", "Lee")
        assert profile.digest == name_digest("Ann Lee")

    def test_variant_changes_hash_only(self):
        base = Profile.from_name("Ann Lee")
        other = Profile.from_name("Ann Lee", variant=2)
        assert other.full_name == base.full_name
        assert other.digest != base.digest
        assert other.digest == name_digest("Ann Lee2")

    def test_same_name_same_profile(self):
        assert Profile.from_name("Ann Lee") == Profile.from_name("Ann Lee")

    def test_blank_name_rejected(self):
        with pytest.raises(InvalidProfile):
            Profile.from_name("   ")


class TestProfileValidation:
    """Profiles that would break grid sizes or hash lookups are rejected."""

    def test_empty_full_name(self):
        with pytest.raises(InvalidProfile) as exc:
            Profile(full_name="", name_parts=("Ann",), digest=BASE_DIGEST)
        assert exc.value.field_name == "full_name"

    def test_no_name_parts(self):
        with pytest.raises(InvalidProfile):
            Profile(full_name="Ann", name_parts=(), digest=BASE_DIGEST)

    def test_empty_name_part(self):
        with pytest.raises(InvalidProfile) as exc:
            Profile(full_name="Ann", name_parts=("", "Ann"), digest=BASE_DIGEST)
        assert exc.value.field_name == "name_parts"

    def test_short_hash(self):
        with pytest.raises(InvalidProfile):
            Profile(full_name="Ann", name_parts=("Ann",), digest="0" * (MIN_HASH_LENGTH - 1))

    def test_empty_hash(self):
        with pytest.raises(InvalidProfile):
            Profile(full_name="Ann", name_parts=("Ann",), digest="")

    def test_is_a_value_error(self):
        with pytest.raises(ValueError):
            Profile(full_name="Ann", name_parts=("Ann",), digest="")

    def test_minimum_length_hash_accepted(self):
        profile = Profile(full_name="Ann", name_parts=["Ann"], digest="0" * MIN_HASH_LENGTH)
        assert profile.name_parts == ("Ann",)
        assert profile.first_char == "A"
        assert profile.part_count == 1

    def test_hash_characters_must_be_bytes(self):
        digest = BASE_DIGEST[:27] + "\uffff" + BASE_DIGEST[28:]
        with pytest.raises(InvalidProfile) as exc:
            Profile(full_name="Ann", name_parts=("Ann",), digest=digest)
        assert exc.value.field_name == "digest"

    def test_latin1_hash_characters_accepted(self):
        digest = "\xff" * MIN_HASH_LENGTH
        assert Profile(full_name="Ann", name_parts=("Ann",), digest=digest).digest == digest

    @pytest.mark.parametrize(
        "data,field_name",
        [
            ({"full_name": "Ann", "name_parts": None, "digest": BASE_DIGEST}, "name_parts"),
            ({"full_name": "Ann", "name_parts": ("Ann",), "digest": None}, "digest"),
            ({"name_parts": ("Ann",), "digest": BASE_DIGEST}, "full_name"),
        ],
    )
    def test_type_errors_become_invalid_profile(self, data, field_name):
        with pytest.raises(InvalidProfile) as exc:
            Profile(**data)
        assert exc.value.field_name == field_name

    def test_profiles_are_immutable_and_hashable(self):
        profile = Profile.from_name("Ann Lee")
        with pytest.raises(ValidationError):
            profile.full_name = "Bob"
        assert len({profile, Profile.from_name("Ann Lee")}) == 1
