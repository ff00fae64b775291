from twinfind.core.models import HashAlgorithmName
from twinfind.services.report_service import OutputFormat

ALGORITHM_ALIASES = {
    "blake3": HashAlgorithmName.BLAKE3,
    "sha256": HashAlgorithmName.SHA256,
    "xxh128": HashAlgorithmName.XXH128,
    "xxhash": HashAlgorithmName.XXH128,
}

ALGORITHM_CHOICES = list(ALGORITHM_ALIASES.keys())

ALGORITHM_HELP_TEXT = (
    "Hash algorithm for partial and full hashing:\n"
    "  blake3         : BLAKE3, cryptographic (default)\n"
    "  sha256         : SHA-256, cryptographic\n"
    "  xxh128, xxhash : xxHash3-128, fastest but NOT cryptographic\n"
)

FORMAT_ALIASES = {
    "txt": OutputFormat.TXT,
    "text": OutputFormat.TXT,
    "csv": OutputFormat.CSV,
    "json": OutputFormat.JSON,
}

FORMAT_CHOICES = list(FORMAT_ALIASES.keys())

FORMAT_HELP_TEXT = (
    "Report format:\n"
    "  txt  : groups and metrics as plain text (default)\n"
    "  csv  : 'group,path' rows, then 'metric,value' rows\n"
    "  json : {\"metrics\": {...}, \"groups\": [...]}\n"
)

EPILOG_TEXT = """
Examples:
  Basic usage - find duplicates in Downloads folder
  %(prog)s ~/Downloads

  Write a JSON report to a file
  %(prog)s ~/Downloads --format json -o ~/report.json

  Use 4 worker threads and SHA-256, show progress and statistics
  %(prog)s ~/Photos -w 4 --algorithm sha256 -v
"""
