"""
Unit tests for the observation validation predicates.

The predicates only read attributes, so ``SimpleNamespace`` stands in
for an unsaved ``Observation``.
"""

from __future__ import annotations

from types import SimpleNamespace

import pytest

from observations.validation import (
    MISSING_POSTCODE,
    MISSING_READING,
    check_complete,
    rejection_reason,
    validate,
)


def make(**overrides) -> SimpleNamespace:
    fields = {
        "postcode": "EH1 1AA",
        "temperature": None,
        "ph": None,
        "alkalinity": None,
        "turbidity": None,
        "visual_observations": [],
        "image_paths": [],
    }
    fields.update(overrides)
    return SimpleNamespace(**fields)


def make_complete(**overrides) -> SimpleNamespace:
    fields = {
        "temperature": 12.5,
        "ph": 7.2,
        "alkalinity": 80.0,
        "turbidity": 1.5,
        "visual_observations": ["Clear"],
        "image_paths": ["img/a.jpg"],
    }
    fields.update(overrides)
    return make(**fields)


class TestValidate:

    def test_postcode_and_one_measurement_is_valid(self):
        assert validate(make(temperature=12.5))

    def test_postcode_and_tag_only_is_valid(self):
        assert validate(make(visual_observations=["Clear"]))

    def test_zero_reading_counts_as_present(self):
        assert validate(make(ph=0.0))

    @pytest.mark.parametrize("postcode", [None, "", "   "])
    def test_missing_postcode_is_invalid(self, postcode):
        observation = make(postcode=postcode, temperature=12.5)
        assert not validate(observation)
        assert rejection_reason(observation) == MISSING_POSTCODE

    def test_postcode_without_any_reading_is_invalid(self):
        observation = make()
        assert not validate(observation)
        assert rejection_reason(observation) == MISSING_READING

    def test_blank_tags_do_not_count(self):
        assert not validate(make(visual_observations=["", "  "]))

    def test_images_alone_do_not_make_it_valid(self):
        assert not validate(make(image_paths=["img/a.jpg"]))


class TestCheckComplete:

    def test_all_fields_present_is_complete(self):
        assert check_complete(make_complete())

    @pytest.mark.parametrize("field", ["temperature", "ph", "alkalinity", "turbidity"])
    def test_missing_measurement_is_not_complete(self, field):
        assert not check_complete(make_complete(**{field: None}))

    def test_missing_tags_is_not_complete(self):
        assert not check_complete(make_complete(visual_observations=[]))

    def test_missing_images_is_not_complete(self):
        assert not check_complete(make_complete(image_paths=[]))

    def test_blank_image_paths_do_not_count(self):
        assert not check_complete(make_complete(image_paths=[" "]))

    def test_complete_implies_valid(self):
        observation = make_complete()
        assert check_complete(observation) and validate(observation)
