"""Project-wide constants shared by the web application and its helpers."""

LOG_FORMAT: str = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
LOG_DATE_FORMAT: str = '%Y-%m-%d %H:%M:%S'

# Short identifier alphabet: 64 URL-safe symbols
SHORTID_ALPHABET: str = '0123456789abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ_-'
SHORTID_MIN_LENGTH: int = 7
SHORTID_MAX_LENGTH: int = 14
SHORTID_MIN_VALID_LENGTH: int = 6

QUANTITATIVE_DATA_TYPE: str = 'quantitative'
