def _channel(value):
    """Clamp a channel value into [0, 255] and truncate it"""
    return int(max(0.0, min(255.0, value)))


class Color:
    """RGB color with 8-bit channels and saturating arithmetic"""

    __slots__ = ('r', 'g', 'b')

    def __init__(self, r, g, b):
        self.r = _channel(r)
        self.g = _channel(g)
        self.b = _channel(b)

    @classmethod
    def black(cls):
        return cls(0, 0, 0)

    @classmethod
    def white(cls):
        return cls(255, 255, 255)

    @classmethod
    def from_hex(cls, value):
        """Unpack a 0xRRGGBB integer"""
        return cls((value >> 16) & 0xFF, (value >> 8) & 0xFF, value & 0xFF)

    def to_hex(self):
        """Pack into a 0xRRGGBB integer"""
        return (self.r << 16) | (self.g << 8) | self.b

    def lerp(self, other, factor):
        """Blend towards other by factor, truncating each channel"""
        return Color(
            self.r * (1.0 - factor) + other.r * factor,
            self.g * (1.0 - factor) + other.g * factor,
            self.b * (1.0 - factor) + other.b * factor,
        )

    def __add__(self, other):
        return Color(self.r + other.r, self.g + other.g, self.b + other.b)

    def __mul__(self, other):
        if isinstance(other, Color):
            # Modulate, both operands normalized to [0, 1]
            return Color(self.r * other.r / 255.0,
                         self.g * other.g / 255.0,
                         self.b * other.b / 255.0)
        return Color(self.r * other, self.g * other, self.b * other)

    __rmul__ = __mul__

    def __eq__(self, other):
        if not isinstance(other, Color):
            return NotImplemented
        return (self.r, self.g, self.b) == (other.r, other.g, other.b)

    def __hash__(self):
        return hash((self.r, self.g, self.b))

    def __iter__(self):
        yield self.r
        yield self.g
        yield self.b

    def __repr__(self):
        return f"Color({self.r}, {self.g}, {self.b})"
