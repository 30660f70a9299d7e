"""
Coherent noise functions for terrain generation.

Numpy implementations driven by an integer lattice hash, so every sample is
a pure function of ``(seed, x, y)``:
- Gradient (Perlin-style) noise
- Fractional Brownian motion over several octaves
"""

import numpy as np

_MASK32 = 0xFFFFFFFF

_PRIME_X = np.uint64(0x9E3779B97F4A7C15)
_PRIME_Y = np.uint64(0xC2B2AE3D27D4EB4F)
_PRIME_SEED = np.uint64(0x165667B19E3779F9)
_MIX_1 = np.uint64(0xFF51AFD7ED558CCD)
_MIX_2 = np.uint64(0xC4CEB9FE1A85EC53)
_SHIFT = np.uint64(33)

_TWO_PI = 2.0 * np.pi


def fold_seed(seed: int) -> int:
    """Fold an arbitrary-size integer seed into 32 bits."""

    seed = int(seed)
    value = seed if seed >= 0 else ~seed
    folded = 0 if seed >= 0 else _MASK32
    while value:
        folded ^= value & _MASK32
        value >>= 32
    return folded


def hash_coord(ix: np.ndarray, iy: np.ndarray, seed: int) -> np.ndarray:
    """Hash integer lattice coordinates to uint64 values."""

    h = ix.astype(np.uint64) * _PRIME_X
    h ^= iy.astype(np.uint64) * _PRIME_Y
    h ^= np.full_like(h, fold_seed(seed)) * _PRIME_SEED
    h ^= h >> _SHIFT
    h *= _MIX_1
    h ^= h >> _SHIFT
    h *= _MIX_2
    h ^= h >> _SHIFT
    return h


def _gradient(ix: np.ndarray, iy: np.ndarray, seed: int):
    """Unit gradient vectors at lattice points."""

    h = hash_coord(ix, iy, seed)
    angle = (h >> np.uint64(40)).astype(np.float64) / float(1 << 24) * _TWO_PI
    return np.cos(angle), np.sin(angle)


def smooth_step(t: np.ndarray) -> np.ndarray:
    """Quintic fade curve (6t^5 - 15t^4 + 10t^3)."""
    return t * t * t * (t * (t * 6.0 - 15.0) + 10.0)


def gradient_noise(x: np.ndarray, y: np.ndarray, seed: int = 0) -> np.ndarray:
    """
    Single-octave gradient noise.

    Args:
        x, y: Coordinate arrays (same shape)
        seed: Integer seed

    Returns:
        Noise values in range approximately [-1, 1]
    """

    x = np.asarray(x, dtype=np.float64)
    y = np.asarray(y, dtype=np.float64)

    x0f = np.floor(x)
    y0f = np.floor(y)
    x0 = x0f.astype(np.int64)
    y0 = y0f.astype(np.int64)
    x1 = x0 + 1
    y1 = y0 + 1

    fx = x - x0f
    fy = y - y0f

    gx00, gy00 = _gradient(x0, y0, seed)
    gx10, gy10 = _gradient(x1, y0, seed)
    gx01, gy01 = _gradient(x0, y1, seed)
    gx11, gy11 = _gradient(x1, y1, seed)

    d00 = gx00 * fx + gy00 * fy
    d10 = gx10 * (fx - 1.0) + gy10 * fy
    d01 = gx01 * fx + gy01 * (fy - 1.0)
    d11 = gx11 * (fx - 1.0) + gy11 * (fy - 1.0)

    u = smooth_step(fx)
    v = smooth_step(fy)

    nx0 = d00 + u * (d10 - d00)
    nx1 = d01 + u * (d11 - d01)

    # Gradient noise peaks at sqrt(2)/2 in 2D
    return (nx0 + v * (nx1 - nx0)) * np.sqrt(2.0)


def fbm_noise(
    x: np.ndarray,
    y: np.ndarray,
    octaves: int = 4,
    persistence: float = 0.5,
    lacunarity: float = 2.0,
    seed: int = 0
) -> np.ndarray:
    """
    Fractional Brownian motion: octaves of gradient noise.

    Args:
        x, y: Coordinate arrays
        octaves: Number of octaves to sum
        persistence: Amplitude reduction per octave
        lacunarity: Frequency multiplication per octave
        seed: Integer seed; octave ``i`` uses ``seed + i``

    Returns:
        Noise values in range approximately [-1, 1]
    """

    total = np.zeros(np.shape(x), dtype=np.float64)
    amplitude = 1.0
    freq = 1.0
    max_value = 0.0

    for i in range(octaves):
        total += gradient_noise(np.asarray(x) * freq, np.asarray(y) * freq, seed + i) * amplitude
        max_value += amplitude

        amplitude *= persistence
        freq *= lacunarity

    return total / max_value
