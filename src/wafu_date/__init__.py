from .date_parser import DateMatch, parse_date, try_parse_date

__all__ = ["DateMatch", "parse_date", "try_parse_date"]
