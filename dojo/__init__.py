"""
Codewars kata scraper.

This package extracts a single kata from its rendered Codewars page with a
real browser, validates it as an immutable Kata record, and stores it on
disk together with generated solution and test files.
"""
