#
# PROJECT: vector-scene-renderer
# MODULE: vector_scene_renderer/math_utils.py
# STATUS: Level 2 - Implementation
# LOG_REF: 2026-10-18
#

import math
from dataclasses import dataclass, field

TWO_PI = 2.0 * math.pi


class Vec3:
    """Immutable 3-component vector."""
    __slots__ = ('x', 'y', 'z')

    def __init__(self, x: float = 0.0, y: float = 0.0, z: float = 0.0):
        object.__setattr__(self, 'x', float(x))
        object.__setattr__(self, 'y', float(y))
        object.__setattr__(self, 'z', float(z))

    def __setattr__(self, name, value):
        raise AttributeError("Vec3 is immutable")

    def __delattr__(self, name):
        raise AttributeError("Vec3 is immutable")

    @classmethod
    def of(cls, value) -> 'Vec3':
        """Coerce a Vec3 or any 3-item sequence into a Vec3."""
        if isinstance(value, Vec3):
            return value
        x, y, z = value
        return cls(x, y, z)

    def __repr__(self):
        return f"Vec3({self.x:.2f}, {self.y:.2f}, {self.z:.2f})"

    def __iter__(self):
        yield self.x
        yield self.y
        yield self.z

    def __getitem__(self, index):
        if index == 0: return self.x
        if index == 1: return self.y
        if index == 2: return self.z
        raise IndexError("Vec3 index out of range")

    def __eq__(self, other):
        if isinstance(other, Vec3):
            return self.x == other.x and self.y == other.y and self.z == other.z
        return NotImplemented

    def __hash__(self):
        return hash((self.x, self.y, self.z))

    def __add__(self, other):
        if isinstance(other, Vec3):
            return Vec3(self.x + other.x, self.y + other.y, self.z + other.z)
        return NotImplemented

    def __sub__(self, other):
        if isinstance(other, Vec3):
            return Vec3(self.x - other.x, self.y - other.y, self.z - other.z)
        return NotImplemented

    def __mul__(self, scalar):
        return Vec3(self.x * scalar, self.y * scalar, self.z * scalar)

    __rmul__ = __mul__

    def __neg__(self):
        return Vec3(-self.x, -self.y, -self.z)

    def __truediv__(self, scalar):
        return Vec3(self.x / scalar, self.y / scalar, self.z / scalar)

    def add(self, other) -> 'Vec3':
        return self + other

    def sub(self, other) -> 'Vec3':
        return self - other

    def scale(self, factor: float) -> 'Vec3':
        return self * factor

    def dot(self, other) -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other) -> 'Vec3':
        return Vec3(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x
        )

    def length(self) -> float:
        return math.sqrt(self.x * self.x + self.y * self.y + self.z * self.z)

    def distance_to(self, other) -> float:
        return (self - other).length()

    def normalize(self) -> 'Vec3':
        m = self.length()
        if m == 0:
            return Vec3(0, 0, 0)
        return self / m

    def is_finite(self) -> bool:
        return math.isfinite(self.x) and math.isfinite(self.y) and math.isfinite(self.z)


class Mat4:
    """4x4 matrix, [row][col] storage, column-vector convention (M @ v)."""
    __slots__ = ('m',)

    def __init__(self, data=None):
        if data:
            self.m = [list(map(float, row)) for row in data]
        else:
            self.m = [[0.0] * 4 for _ in range(4)]

    def __repr__(self):
        rows = ", ".join("[" + ", ".join(f"{v:.3f}" for v in row) + "]" for row in self.m)
        return f"Mat4([{rows}])"

    @classmethod
    def identity(cls) -> 'Mat4':
        res = cls()
        for i in range(4):
            res.m[i][i] = 1.0
        return res

    @classmethod
    def translation(cls, x, y, z) -> 'Mat4':
        mat = cls.identity()
        mat.m[0][3] = x
        mat.m[1][3] = y
        mat.m[2][3] = z
        return mat

    @classmethod
    def scale(cls, sx, sy, sz) -> 'Mat4':
        mat = cls.identity()
        mat.m[0][0] = sx
        mat.m[1][1] = sy
        mat.m[2][2] = sz
        return mat

    @classmethod
    def rotation_x(cls, rad: float) -> 'Mat4':
        mat = cls.identity()
        c = math.cos(rad)
        s = math.sin(rad)
        mat.m[1][1] = c
        mat.m[1][2] = -s
        mat.m[2][1] = s
        mat.m[2][2] = c
        return mat

    @classmethod
    def rotation_y(cls, rad: float) -> 'Mat4':
        mat = cls.identity()
        c = math.cos(rad)
        s = math.sin(rad)
        mat.m[0][0] = c
        mat.m[0][2] = s
        mat.m[2][0] = -s
        mat.m[2][2] = c
        return mat

    @classmethod
    def rotation_z(cls, rad: float) -> 'Mat4':
        mat = cls.identity()
        c = math.cos(rad)
        s = math.sin(rad)
        mat.m[0][0] = c
        mat.m[0][1] = -s
        mat.m[1][0] = s
        mat.m[1][1] = c
        return mat

    @classmethod
    def rotation_euler(cls, rx: float, ry: float, rz: float) -> 'Mat4':
        """Euler rotation applied X first, then Y, then Z (Rz @ Ry @ Rx)."""
        return cls.rotation_z(rz) @ cls.rotation_y(ry) @ cls.rotation_x(rx)

    @classmethod
    def compose(cls, position, rotation, scale) -> 'Mat4':
        """Local matrix T @ R @ S."""
        return (cls.translation(*position)
                @ cls.rotation_euler(*rotation)
                @ cls.scale(*scale))

    def __matmul__(self, other):
        if isinstance(other, Mat4):
            res = Mat4()
            a, b = self.m, other.m
            for r in range(4):
                row = a[r]
                for c in range(4):
                    res.m[r][c] = (row[0] * b[0][c] + row[1] * b[1][c]
                                   + row[2] * b[2][c] + row[3] * b[3][c])
            return res
        return NotImplemented

    def mul_vec3(self, v: Vec3) -> Vec3:
        """Multiply with Vec3 as if w=1, return Vec3 (ignoring w result)."""
        m = self.m
        x = m[0][0]*v.x + m[0][1]*v.y + m[0][2]*v.z + m[0][3]
        y = m[1][0]*v.x + m[1][1]*v.y + m[1][2]*v.z + m[1][3]
        z = m[2][0]*v.x + m[2][1]*v.y + m[2][2]*v.z + m[2][3]
        return Vec3(x, y, z)

    def mul_direction(self, v: Vec3) -> Vec3:
        """Multiply with Vec3 as if w=0 (translation ignored)."""
        m = self.m
        return Vec3(m[0][0]*v.x + m[0][1]*v.y + m[0][2]*v.z,
                    m[1][0]*v.x + m[1][1]*v.y + m[1][2]*v.z,
                    m[2][0]*v.x + m[2][1]*v.y + m[2][2]*v.z)

    def get_translation(self) -> Vec3:
        return Vec3(self.m[0][3], self.m[1][3], self.m[2][3])

    def affine_inverse(self) -> 'Mat4':
        """Inverse of an affine matrix (upper 3x3 inverted by cofactors).

        A singular 3x3 block (zero scale on some axis) yields a matrix that
        collapses everything onto the translation, never a division by zero.
        """
        m = self.m
        a, b, c = m[0][0], m[0][1], m[0][2]
        d, e, f = m[1][0], m[1][1], m[1][2]
        g, h, i = m[2][0], m[2][1], m[2][2]
        co00 = e * i - f * h
        co01 = -(d * i - f * g)
        co02 = d * h - e * g
        det = a * co00 + b * co01 + c * co02
        inv = Mat4.identity()
        if det == 0:
            inv_det = 0.0
        else:
            inv_det = 1.0 / det
        r = [
            [co00, -(b * i - c * h), b * f - c * e],
            [co01, a * i - c * g, -(a * f - c * d)],
            [co02, -(a * h - b * g), a * e - b * d],
        ]
        for row in range(3):
            for col in range(3):
                inv.m[row][col] = r[row][col] * inv_det
        tx, ty, tz = m[0][3], m[1][3], m[2][3]
        for row in range(3):
            inv.m[row][3] = -(inv.m[row][0] * tx + inv.m[row][1] * ty + inv.m[row][2] * tz)
        return inv


@dataclass
class Transform:
    """Local transform: position, Euler rotation (radians, X then Y then Z), scale."""
    position: Vec3 = field(default_factory=Vec3)
    rotation: Vec3 = field(default_factory=Vec3)
    scale: Vec3 = field(default_factory=lambda: Vec3(1.0, 1.0, 1.0))

    def __post_init__(self):
        self.position = Vec3.of(self.position)
        self.rotation = Vec3.of(self.rotation)
        self.scale = Vec3.of(self.scale)

    def matrix(self) -> Mat4:
        return Mat4.compose(self.position, self.rotation, self.scale)


def clamp(value: float, lo: float, hi: float) -> float:
    return lo if value < lo else hi if value > hi else value


def wrap_angle(rad: float) -> float:
    """Wrap an angle into [0, 2π)."""
    wrapped = rad % TWO_PI
    # A tiny negative input rounds up to exactly 2π
    if wrapped >= TWO_PI:
        wrapped = 0.0
    return wrapped


def shortest_angle_delta(src: float, dst: float) -> float:
    """Signed difference dst - src mapped into [-π, π)."""
    return (dst - src + math.pi) % TWO_PI - math.pi


def lerp(a: float, b: float, t: float) -> float:
    return a + (b - a) * t


def newell_normal(points) -> Vec3:
    """Unnormalized polygon normal by Newell's method.

    Tolerates repeated vertices (collapsed sphere-pole quads); a zero-area
    polygon yields the zero vector.
    """
    nx = ny = nz = 0.0
    n = len(points)
    for i in range(n):
        cur = points[i]
        nxt = points[(i + 1) % n]
        nx += (cur.y - nxt.y) * (cur.z + nxt.z)
        ny += (cur.z - nxt.z) * (cur.x + nxt.x)
        nz += (cur.x - nxt.x) * (cur.y + nxt.y)
    return Vec3(nx, ny, nz)
