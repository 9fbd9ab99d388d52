"""MinimaWatch: TAF/METAR ceiling and visibility minima checks."""
