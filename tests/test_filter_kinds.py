"""
Unit tests for filter_kinds module.
"""

import pytest

from IF_Libs.FilterLib.filter_kinds import FilterDescriptor, FilterKind, list_filter_kinds


class TestFilterKind:
    """Tests for the FilterKind enum."""

    def test_closed_set(self):
        assert [kind.value for kind in FilterKind] == [
            "Crystallize",
            "Edges",
            "GaussianBlur",
            "Pixellate",
            "SepiaTone",
            "UnsharpMask",
            "Vignette",
        ]

    def test_display_names(self):
        assert FilterKind.GAUSSIAN_BLUR.display_name == "Gaussian Blur"
        assert FilterKind.SEPIA_TONE.display_name == "Sepia Tone"
        assert FilterKind.EDGES.display_name == "Edges"

    @pytest.mark.parametrize(
        "name",
        ["GaussianBlur", "Gaussian Blur", "gaussian blur", "GAUSSIAN_BLUR", "gaussian_blur"],
    )
    def test_from_name_variants(self, name):
        assert FilterKind.from_name(name) is FilterKind.GAUSSIAN_BLUR

    def test_from_name_passes_members_through(self):
        assert FilterKind.from_name(FilterKind.VIGNETTE) is FilterKind.VIGNETTE

    def test_from_name_unknown_lists_available(self):
        with pytest.raises(KeyError) as excinfo:
            FilterKind.from_name("Posterize")

        assert "Sepia Tone" in str(excinfo.value)

    def test_list_filter_kinds_in_picker_order(self):
        kinds = list_filter_kinds()

        assert kinds[0] is FilterKind.CRYSTALLIZE
        assert kinds[-1] is FilterKind.VIGNETTE
        assert len(kinds) == 7


class TestFilterDescriptor:
    """Tests for FilterDescriptor."""

    @pytest.mark.parametrize("kind", list(FilterKind))
    def test_defaults_cover_declared_keys(self, kind):
        descriptor = kind.descriptor

        assert set(descriptor.defaults) == set(descriptor.input_keys)

    def test_edges_declares_nothing(self):
        assert FilterKind.EDGES.descriptor.input_keys == ()

    def test_accepts(self):
        descriptor = FilterKind.UNSHARP_MASK.descriptor

        assert descriptor.accepts("radius")
        assert descriptor.accepts("intensity")
        assert not descriptor.accepts("scale")

    def test_descriptor_is_frozen(self):
        with pytest.raises(Exception):
            FilterKind.PIXELLATE.descriptor.display_name = "Mosaic"

    def test_to_dict(self):
        data = FilterDescriptor("Test", ("scale",), {"scale": 2.0}).to_dict()

        assert data == {"display_name": "Test", "input_keys": ["scale"], "defaults": {"scale": 2.0}}
