"""Mood composers, one module per mood.

- ``base`` - the ``MoodComposer`` contract and shared note helpers
- ``suspense``, ``eerie``, ``upbeat``, ``calm``, ``ambient``, ``jazz`` - one composer each

The registry and the ``compose()`` entry point live in ``moodmidi.mood``.
"""
