"""Tests for splash_theme.core.colour — hex/Lab conversion, ΔE, contrast, HSL."""

import pytest
from splash_theme.core.colour import (
    blend_lab,
    contrast_ratio,
    delta_e,
    desaturate,
    from_lab,
    hex_to_rgb,
    lightness_hsl,
    normalize_hex,
    relative_luminance,
    saturation_hsl,
    to_lab,
)
from splash_theme.core.errors import InvalidColor

SAMPLES = ['#6a22d9', '#4e4aa5', '#71baed', '#c97f24', '#815117', '#ebcf8c', '#123456', '#fedcba']


class TestHexParsing:
    def test_blue600(self):
        assert hex_to_rgb('#2563eb') == (37, 99, 235)

    def test_uppercase_normalized(self):
        assert normalize_hex('#FFFFFF') == '#ffffff'

    def test_short_hex(self):
        assert normalize_hex('#fff') == '#ffffff'
        assert hex_to_rgb('#f00') == (255, 0, 0)

    def test_no_hash(self):
        assert normalize_hex('ABCDEF') == '#abcdef'

    @pytest.mark.parametrize('bad', ['invalid', '#ff', '#ffffffff', '', '#ggg000', '# 123456'])
    def test_invalid_raises(self, bad):
        with pytest.raises(InvalidColor):
            normalize_hex(bad)

    def test_invalid_is_value_error(self):
        with pytest.raises(ValueError):
            hex_to_rgb('nope')


class TestLab:
    def test_white(self):
        assert to_lab('#ffffff') == pytest.approx((100.0, 0.0, 0.0), abs=1e-3)

    def test_black(self):
        assert to_lab('#000000') == pytest.approx((0.0, 0.0, 0.0), abs=1e-6)

    def test_red_reference_values(self):
        assert to_lab('#ff0000') == pytest.approx((53.24, 80.09, 67.20), abs=0.05)

    @pytest.mark.parametrize('colour', SAMPLES + ['#000000', '#ffffff', '#ff0000'])
    def test_round_trip(self, colour):
        assert from_lab(to_lab(colour)) == colour

    def test_out_of_gamut_is_clamped(self):
        result = from_lab((50.0, 200.0, -200.0))
        assert len(result) == 7
        assert all(0 <= c <= 255 for c in hex_to_rgb(result))


class TestDeltaE:
    @pytest.mark.parametrize('colour', SAMPLES)
    def test_identity(self, colour):
        assert delta_e(colour, colour) == 0.0

    def test_case_insensitive(self):
        assert delta_e('#ABCDEF', '#abcdef') == 0.0

    def test_black_white(self):
        assert delta_e('#000000', '#ffffff') == pytest.approx(100.0, abs=1e-3)

    def test_symmetry(self):
        assert delta_e('#6a22d9', '#c97f24') == delta_e('#c97f24', '#6a22d9')


class TestContrast:
    def test_white_black_is_21(self):
        assert contrast_ratio('#ffffff', '#000000') == pytest.approx(21.0)
        assert contrast_ratio('#000000', '#ffffff') == pytest.approx(21.0)

    def test_same_colour_is_1(self):
        assert contrast_ratio('#815117', '#815117') == 1.0

    @pytest.mark.parametrize('colour', SAMPLES)
    def test_never_below_1(self, colour):
        assert contrast_ratio(colour, '#000000') >= 1.0
        assert contrast_ratio('#000000', colour) >= 1.0

    def test_luminance_bounds(self):
        assert relative_luminance('#000000') == 0.0
        assert relative_luminance('#ffffff') == pytest.approx(1.0)

    def test_wcag_grey_reference(self):
        # #777777 on white is the classic ~4.48:1 "just fails AA" grey
        assert contrast_ratio('#777777', '#ffffff') == pytest.approx(4.48, abs=0.01)


class TestBlendLab:
    def test_endpoints(self):
        assert blend_lab('#6a22d9', '#000000', 0.0) == '#6a22d9'
        assert blend_lab('#6a22d9', '#000000', 1.0) == '#000000'

    def test_midpoint_lightness(self):
        mid = blend_lab('#000000', '#ffffff', 0.5)
        assert to_lab(mid)[0] == pytest.approx(50.0, abs=0.6)

    def test_blend_toward_black_darkens(self):
        assert relative_luminance(blend_lab('#71baed', '#000000', 0.5)) < relative_luminance('#71baed')

    @pytest.mark.parametrize('t', [-0.1, 1.5])
    def test_t_out_of_range(self, t):
        with pytest.raises(ValueError):
            blend_lab('#000000', '#ffffff', t)


class TestSaturation:
    def test_pure_red(self):
        assert saturation_hsl('#ff0000') == pytest.approx(1.0)

    def test_grey(self):
        assert saturation_hsl('#808080') == 0.0

    def test_white_and_black(self):
        assert saturation_hsl('#ffffff') == 0.0
        assert saturation_hsl('#000000') == 0.0

    def test_brand_brown(self):
        assert saturation_hsl('#815117') == pytest.approx(0.697, abs=0.01)


class TestDesaturate:
    def test_full_desaturation_of_red(self):
        assert desaturate('#ff0000', 1.0) == '#808080'

    def test_zero_amount_is_identity(self):
        assert desaturate('#815117', 0.0) == '#815117'

    def test_preserves_lightness(self):
        grey = desaturate('#c97f24', 1.0)
        assert saturation_hsl(grey) == 0.0
        assert lightness_hsl(grey) == pytest.approx(lightness_hsl('#c97f24'), abs=0.005)

    def test_half_amount(self):
        assert saturation_hsl(desaturate('#ff0000', 0.5)) == pytest.approx(0.5, abs=0.01)

    def test_invalid_amount(self):
        with pytest.raises(ValueError):
            desaturate('#ff0000', 2.0)
