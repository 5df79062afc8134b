"""splash_theme.pipeline — image analysis → set assembly → manifest.

extractor → refiner → analyzer work on one image; assembler works on one
folder; manifest walks the whole tree.
"""
