"""Push notification requests, payload builders, logging and statistics for iOS, Android and Huawei."""

__version__ = "0.1.0"