"""
Scaffold a new front-end project from the PC preset template.

Run `create-pc-preset` (or `python -m pcpreset`) in the directory the
project should be created in and answer the questions.
"""
