"""Tests for tonekit.core.hct: HCT conversion, gamut solver and the Hct value type."""

import pytest
from tonekit.core.hct import Hct, difference_degrees, hct_to_rgb, rgb_to_hct, sanitize_degrees


class TestDegrees:
    def test_sanitize(self):
        assert sanitize_degrees(-30.0) == 330.0
        assert sanitize_degrees(360.0) == 0.0
        assert sanitize_degrees(725.0) == 5.0

    def test_sanitize_tiny_negative_stays_below_360(self):
        assert 0.0 <= sanitize_degrees(-1e-14) < 360.0

    def test_difference_wraps(self):
        assert difference_degrees(350.0, 10.0) == pytest.approx(20.0)
        assert difference_degrees(0.0, 180.0) == pytest.approx(180.0)
        assert difference_degrees(90.0, 90.0) == 0.0


class TestRgbToHct:
    def test_red(self):
        h, c, t = rgb_to_hct((255, 0, 0))
        assert h == pytest.approx(40.0, abs=0.1)
        assert c == pytest.approx(104.55, abs=0.1)
        assert t == pytest.approx(53.24, abs=0.05)

    def test_gray_has_no_chroma(self):
        _h, c, t = rgb_to_hct((128, 128, 128))
        assert c < 0.01
        assert t == pytest.approx(53.59, abs=0.05)

    def test_hue_in_range(self):
        for rgb in [(255, 0, 255), (0, 0, 255), (255, 0, 80), (0, 255, 0)]:
            h, _c, _t = rgb_to_hct(rgb)
            assert 0.0 <= h < 360.0


class TestHctToRgb:
    def test_zero_chroma_is_gray(self):
        assert hct_to_rgb(120.0, 0.0, 50.0) == (128, 128, 128)

    def test_extreme_tones_are_gray(self):
        assert hct_to_rgb(200.0, 60.0, 0.1) == (0, 0, 0)
        assert hct_to_rgb(200.0, 60.0, 99.9) == (255, 255, 255)

    def test_tone_is_clamped(self):
        assert hct_to_rgb(10.0, 0.0, 150.0) == (255, 255, 255)
        assert hct_to_rgb(10.0, 0.0, -20.0) == (0, 0, 0)

    def test_negative_chroma_floored(self):
        assert hct_to_rgb(10.0, -5.0, 50.0) == (128, 128, 128)

    def test_in_gamut_request_is_exact(self):
        rgb = (18, 52, 86)
        assert hct_to_rgb(*rgb_to_hct(rgb)) == rgb

    def test_out_of_gamut_reduces_chroma(self):
        rgb = hct_to_rgb(120.0, 200.0, 50.0)
        h, c, t = rgb_to_hct(rgb)
        assert c < 200.0
        assert c > 20.0
        assert t == pytest.approx(50.0, abs=1.0)
        assert difference_degrees(h, 120.0) <= 5.0

    def test_largest_chroma_not_above_request(self):
        # any request past the gamut edge lands on the same edge color
        edge = hct_to_rgb(120.0, 200.0, 50.0)
        nearer = hct_to_rgb(120.0, 150.0, 50.0)
        assert all(abs(a - b) <= 1 for a, b in zip(edge, nearer))
        # a reachable request is honoured, not pushed to the edge
        assert rgb_to_hct(hct_to_rgb(120.0, 20.0, 50.0))[1] == pytest.approx(20.0, abs=1.0)


class TestHct:
    @pytest.mark.parametrize(
        'hue,chroma,tone',
        [(120.0, 30.0, 50.0), (250.0, 40.0, 40.0), (30.0, 50.0, 60.0), (300.0, 20.0, 80.0)],
    )
    def test_round_trip_within_tolerance(self, hue, chroma, tone):
        hct = Hct.from_hct(hue, chroma, tone)
        assert hct.tone == pytest.approx(tone, abs=1.0)
        assert difference_degrees(hct.hue, hue) <= 5.0

    def test_constructors_agree(self):
        a = Hct.from_int(0xFF123456)
        b = Hct.from_rgb((0x12, 0x34, 0x56))
        assert a == b
        assert hash(a) == hash(b)
        assert a.to_int() == 0xFF123456
        assert a.to_rgb() == (0x12, 0x34, 0x56)
        assert a.to_hex() == '#123456'

    def test_not_equal_to_other_types(self):
        assert Hct.from_int(0xFF000000) != 0xFF000000

    def test_values(self):
        hct = Hct.from_rgb((255, 0, 0))
        assert hct.values() == (hct.hue, hct.chroma, hct.tone)

    def test_with_tone_returns_new_instance(self):
        blue = Hct.from_rgb((0, 0, 255))
        lighter = blue.with_tone(70.0)
        assert lighter is not blue
        assert lighter.tone == pytest.approx(70.0, abs=1.0)
        assert blue.to_rgb() == (0, 0, 255)

    def test_with_hue(self):
        base = Hct.from_hct(30.0, 30.0, 60.0)
        turned = base.with_hue(210.0)
        assert difference_degrees(turned.hue, 210.0) <= 5.0
        assert turned.tone == pytest.approx(base.tone, abs=1.0)

    def test_with_chroma_zero_is_gray(self):
        gray = Hct.from_rgb((200, 50, 50)).with_chroma(0.0)
        r, g, b = gray.to_rgb()
        assert r == g == b

    def test_immutable(self):
        hct = Hct.from_rgb((1, 2, 3))
        with pytest.raises(AttributeError):
            hct.hue = 10.0  # type: ignore[misc]

    def test_usable_as_dict_key(self):
        seen = {Hct.from_int(0xFFFF0000): 'red'}
        assert seen[Hct.from_rgb((255, 0, 0))] == 'red'


class TestHctCrossComponent:
    """Achievable chroma depends on hue and tone together."""

    @pytest.mark.parametrize(
        'hue,chroma,tone,new_tone',
        [(250.0, 40.0, 40.0, 80.0), (30.0, 50.0, 60.0, 25.0), (120.0, 30.0, 50.0, 85.0)],
    )
    def test_with_tone_keeps_hue(self, hue, chroma, tone, new_tone):
        base = Hct.from_hct(hue, chroma, tone)
        moved = base.with_tone(new_tone)
        assert moved.tone == pytest.approx(new_tone, abs=1.0)
        assert difference_degrees(moved.hue, base.hue) <= 5.0
        assert moved.chroma <= base.chroma + 1.0

    def test_with_tone_near_white_drops_chroma(self):
        moved = Hct.from_hct(250.0, 40.0, 40.0).with_tone(97.0)
        assert moved.tone == pytest.approx(97.0, abs=1.0)
        assert moved.chroma < 40.0

    @pytest.mark.parametrize('new_hue', [100.0, 60.0, 150.0])
    def test_with_hue_from_saturated_blue(self, new_hue):
        blue = Hct.from_rgb((0, 0, 255))
        turned = blue.with_hue(new_hue)
        assert difference_degrees(turned.hue, new_hue) <= 5.0
        assert turned.tone == pytest.approx(blue.tone, abs=1.0)
        # blue's chroma is out of reach for dark yellows and greens
        assert turned.chroma < blue.chroma

    @pytest.mark.parametrize('hue,tone', [(100.0, 50.0), (250.0, 40.0), (30.0, 70.0)])
    def test_with_chroma_beyond_gamut(self, hue, tone):
        base = Hct.from_hct(hue, 30.0, tone)
        boosted = base.with_chroma(200.0)
        assert 29.0 <= boosted.chroma < 200.0
        assert difference_degrees(boosted.hue, base.hue) <= 2.0
        assert boosted.tone == pytest.approx(base.tone, abs=1.0)
