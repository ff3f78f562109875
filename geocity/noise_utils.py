import numpy as np
import noise


class NoiseGenerator:
    """Seeded 2D coherent noise source.

    The seed picks a fixed offset into the Perlin lattice, so every seed
    samples its own region of the same noise field.
    """

    def __init__(self, seed: int):
        self.seed = seed
        rng = np.random.RandomState(seed)
        self.offset_x, self.offset_y = (float(v) for v in rng.uniform(-500.0, 500.0, size=2))

    def perlin(self, x: float, y: float, frequency: float = 0.001,
               octaves: int = 1, persistence: float = 0.5,
               lacunarity: float = 2.0) -> float:
        return noise.pnoise2(
            x * frequency + self.offset_x,
            y * frequency + self.offset_y,
            octaves=octaves,
            persistence=persistence,
            lacunarity=lacunarity
        )

    def ridged(self, x: float, y: float, frequency: float = 0.003,
               octaves: int = 1) -> float:
        """Folded noise: abs() turns zero crossings into sharp ridges"""
        return abs(self.perlin(x, y, frequency, octaves=octaves))
