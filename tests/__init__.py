"""The WallFit test suite."""
