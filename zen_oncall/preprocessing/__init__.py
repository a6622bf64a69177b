"""
Preprocessing Module
=====================
  - RecordParser:  raw rows -> typed records, with data-quality warnings
"""

from zen_oncall.preprocessing.record_parser import RecordParser

__all__ = ["RecordParser"]
