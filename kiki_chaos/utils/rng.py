import numpy as np
from typing import Optional


class RNG:
    def __init__(self, seed: Optional[int] = None):
        self.rng = np.random.default_rng(seed)

    def seed(self, seed: Optional[int]):
        self.rng = np.random.default_rng(seed)

    def index(self, size: int) -> int:
        '''Uniform random index in [0, size).'''
        return int(self.rng.integers(0, size))

rng = RNG()
