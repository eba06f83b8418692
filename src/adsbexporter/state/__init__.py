"""Series state layer.

The registry here is the single owner of exported series: projection hands
it assignments, and it decides what gets published and what gets retracted.
"""
