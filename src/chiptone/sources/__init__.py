from .basic import RandomSource, SawSource, SquareSource

__all__ = ["RandomSource", "SawSource", "SquareSource"]
