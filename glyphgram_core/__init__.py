"""
Glyphgram core Python package.

Pure logic for the glyph sentence puzzle, kept free of rendering and input.
Modules:
- symbols.py: bitmap parsing and part-of-speech classification
- floodfill.py: 4-connected components over coordinate sets
- board.py: Grid, Coord, Direction and the lift/place protocol
- level.py: Level and the layout builder
- grammar.py: sentence validation
- session.py: a play-through with one fragment in flight
- catalog.py: level files on disk
- atlas.py: code -> texture slot cache for renderers
- cli.py: command line level checker
"""
