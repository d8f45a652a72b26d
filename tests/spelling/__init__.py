"""
spellck Tests Package
=====================
Test suite for the spelling engine and its collaborators.

Run all tests: python3 -m pytest tests/spelling/ -v
Run specific: python3 -m pytest tests/spelling/test_engine.py -v
"""
