from .parser import ScanAnalysis, ScanFields, parse_number, parse_scan_text

__all__ = ["ScanAnalysis", "ScanFields", "parse_number", "parse_scan_text"]
