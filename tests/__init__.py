"""
lineupkit Test Suite

Test Categories:
- unit/: Fast, isolated tests of each model and transform
- integration/: Full editing sessions through ChannelEditor
- fixtures/: Shared program factories
"""
