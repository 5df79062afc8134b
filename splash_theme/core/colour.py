"""Colour math: hex/RGB/Lab conversion, ΔE, WCAG contrast, HSL saturation.

All public functions take and return hex strings ('#rrggbb'). Input is
case-insensitive and may use the 3-digit short form or omit the '#'; output
is always lower-case 6-digit hex.

Lab uses the D65 white point. ΔE is CIE76 (plain Euclidean distance in Lab),
used consistently by the extractor and the refiner.
"""

import colorsys
import math
import re

from splash_theme.core.errors import InvalidColor

RGB = tuple[int, int, int]
Lab = tuple[float, float, float]

_HEX_RE = re.compile(r'#?([0-9a-fA-F]{3}|[0-9a-fA-F]{6})')

# D65 reference white
_XN, _YN, _ZN = 0.95047, 1.0, 1.08883

_EPSILON = (6 / 29) ** 3
_KAPPA_INV = 3 * (6 / 29) ** 2


def normalize_hex(value: str) -> str:
    """Return value as lower-case '#rrggbb'. Raises InvalidColor."""
    if not isinstance(value, str):
        raise InvalidColor(f'Not a colour string: {value!r}')
    m = _HEX_RE.fullmatch(value.strip())
    if not m:
        raise InvalidColor(f'Invalid hex colour: {value!r}')
    digits = m.group(1).lower()
    if len(digits) == 3:
        digits = ''.join(ch * 2 for ch in digits)
    return f'#{digits}'


def hex_to_rgb(value: str) -> RGB:
    digits = normalize_hex(value)[1:]
    return (int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16))


def rgb_to_hex(r: float, g: float, b: float) -> str:
    """Round and clamp float channels (0-255) into a hex string."""
    channels = [min(255, max(0, int(round(c)))) for c in (r, g, b)]
    return '#{:02x}{:02x}{:02x}'.format(*channels)


def _srgb_to_linear(c: float) -> float:
    """Standard sRGB gamma expansion, c in [0, 1]."""
    if c <= 0.04045:
        return c / 12.92
    return ((c + 0.055) / 1.055) ** 2.4


def _linear_to_srgb(c: float) -> float:
    c = min(1.0, max(0.0, c))
    if c <= 0.0031308:
        return c * 12.92
    return 1.055 * c ** (1 / 2.4) - 0.055


def _f(t: float) -> float:
    if t > _EPSILON:
        return t ** (1 / 3)
    return t / _KAPPA_INV + 4 / 29


def _f_inv(t: float) -> float:
    if t > 6 / 29:
        return t**3
    return _KAPPA_INV * (t - 4 / 29)


def to_lab(value: str) -> Lab:
    """Convert a hex colour to CIE L*a*b* (D65)."""
    r, g, b = (_srgb_to_linear(c / 255.0) for c in hex_to_rgb(value))

    x = 0.4124564 * r + 0.3575761 * g + 0.1804375 * b
    y = 0.2126729 * r + 0.7151522 * g + 0.0721750 * b
    z = 0.0193339 * r + 0.1191920 * g + 0.9503041 * b

    fx, fy, fz = _f(x / _XN), _f(y / _YN), _f(z / _ZN)
    return (116 * fy - 16, 500 * (fx - fy), 200 * (fy - fz))


def from_lab(lab: Lab) -> str:
    """Convert CIE L*a*b* back to hex, clamping out-of-gamut channels."""
    L, a, b = lab
    fy = (L + 16) / 116
    fx = fy + a / 500
    fz = fy - b / 200

    x = _f_inv(fx) * _XN
    y = _f_inv(fy) * _YN
    z = _f_inv(fz) * _ZN

    r = 3.2404542 * x - 1.5371385 * y - 0.4985314 * z
    g = -0.9692660 * x + 1.8760108 * y + 0.0415560 * z
    bl = 0.0556434 * x - 0.2040259 * y + 1.0572252 * z

    return rgb_to_hex(*(_linear_to_srgb(c) * 255.0 for c in (r, g, bl)))


def delta_e(c1: str, c2: str) -> float:
    """CIE76 colour difference."""
    return math.dist(to_lab(c1), to_lab(c2))


def relative_luminance(value: str) -> float:
    """WCAG 2.x relative luminance in [0, 1]."""
    r, g, b = (_srgb_to_linear(c / 255.0) for c in hex_to_rgb(value))
    return 0.2126 * r + 0.7152 * g + 0.0722 * b


def contrast_ratio(c1: str, c2: str) -> float:
    """WCAG contrast ratio, always >= 1 (lighter luminance on top)."""
    l1, l2 = relative_luminance(c1), relative_luminance(c2)
    if l2 > l1:
        l1, l2 = l2, l1
    return (l1 + 0.05) / (l2 + 0.05)


def blend_lab(c1: str, c2: str, t: float) -> str:
    """Linear interpolation from c1 (t=0) to c2 (t=1) in Lab space."""
    if not 0.0 <= t <= 1.0:
        raise ValueError(f'Blend parameter must be in [0, 1], got {t}')
    lab1, lab2 = to_lab(c1), to_lab(c2)
    return from_lab(tuple(p + (q - p) * t for p, q in zip(lab1, lab2)))


def _hls(value: str) -> tuple[float, float, float]:
    r, g, b = hex_to_rgb(value)
    return colorsys.rgb_to_hls(r / 255.0, g / 255.0, b / 255.0)


def saturation_hsl(value: str) -> float:
    return _hls(value)[2]


def lightness_hsl(value: str) -> float:
    return _hls(value)[1]


def desaturate(value: str, amount: float) -> str:
    """Scale HSL saturation by (1 - amount). amount=1 gives a grey of equal lightness."""
    if not 0.0 <= amount <= 1.0:
        raise ValueError(f'Desaturation amount must be in [0, 1], got {amount}')
    h, light, s = _hls(value)
    r, g, b = colorsys.hls_to_rgb(h, light, s * (1.0 - amount))
    return rgb_to_hex(r * 255.0, g * 255.0, b * 255.0)
