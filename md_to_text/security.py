"""Validation of file paths, URLs and payload sizes handed to the converter."""

import ipaddress
import logging
import os
import re
from dataclasses import dataclass
from typing import Optional, Union
from urllib.parse import urlparse

from .processing.errors import SecurityError


logger = logging.getLogger(__name__)

_INVALID_PATH_CHARS = re.compile(r'[\x00<>"|?*]')
_BLOCKED_HOSTS = {'localhost', '127.0.0.1', '0.0.0.0', '::1'}


@dataclass(frozen=True)
class SecurityConfig:
    """Limits applied to files and URLs before conversion."""
    # Maximum payload size in bytes (10 MiB)
    max_file_size: int = 10 * 1024 * 1024
    allowed_extensions: tuple[str, ...] = ('.md', '.markdown', '.txt')
    blocked_paths: tuple[str, ...] = (
        '/etc',
        '/proc',
        '/sys',
        '/dev',
        '/root',
        'C:\\Windows',
        'C:\\Program Files',
        'C:\\Users\\Administrator',
    )
    # Seconds before a remote fetch is abandoned
    url_timeout: float = 30.0
    allowed_protocols: tuple[str, ...] = ('http', 'https')


class SecurityValidator:
    """Refuses paths, URLs and sizes that should not reach the converter."""

    def __init__(self, config: Optional[SecurityConfig] = None):
        """Initialize the validator.

        Args:
            config: Security limits; defaults apply when omitted.
        """
        self.config = config or SecurityConfig()

    def validate_file_path(self, file_path: Union[str, os.PathLike]) -> None:
        """Check a local path before it is read.

        Args:
            file_path: File or directory path.

        Raises:
            SecurityError: If the path is empty, escapes upward, points into
                a blocked location, has a disallowed extension or contains
                invalid characters.
        """
        if not file_path or not isinstance(file_path, (str, os.PathLike)):
            raise SecurityError('File path must be a non-empty string')

        normalized = os.path.normpath(os.fspath(file_path))

        if '..' in normalized.split(os.sep) or normalized.startswith('..'):
            raise SecurityError('Path traversal detected')

        for blocked in self.config.blocked_paths:
            if normalized == blocked or normalized.startswith(blocked.rstrip('/\\') + os.sep):
                raise SecurityError(f"Access to path '{blocked}' is blocked")

        extension = os.path.splitext(normalized)[1].lower()
        if extension and extension not in self.config.allowed_extensions:
            raise SecurityError(f"File extension '{extension}' is not allowed")

        if _INVALID_PATH_CHARS.search(normalized):
            raise SecurityError('File path contains invalid characters')

        if normalized.startswith('.') and normalized != '.':
            raise SecurityError('File path contains invalid characters')

    def validate_file_size(self, size: int) -> None:
        """Raise SecurityError when ``size`` bytes exceeds the configured limit."""
        if size > self.config.max_file_size:
            raise SecurityError(
                f"File size {size} bytes exceeds maximum allowed size of "
                f"{self.config.max_file_size} bytes"
            )

    def validate_url(self, url: str) -> None:
        """Check a URL before it is fetched.

        Args:
            url: Absolute http(s) URL.

        Raises:
            SecurityError: If the URL is malformed, uses a disallowed scheme,
                or targets a local or private host.
        """
        if not url or not isinstance(url, str):
            raise SecurityError('URL must be a non-empty string')

        try:
            parsed = urlparse(url.strip())
            hostname = parsed.hostname
        except ValueError:
            raise SecurityError('Invalid URL format')

        scheme = parsed.scheme.lower()
        if not scheme or not hostname:
            raise SecurityError('Invalid URL format')
        if scheme not in self.config.allowed_protocols:
            raise SecurityError(f"Protocol '{scheme}:' is not allowed")

        hostname = hostname.lower()
        if hostname in _BLOCKED_HOSTS:
            raise SecurityError('Access to local/internal hosts is blocked')

        address = self._parse_ip(hostname)
        if address is None:
            if '.' not in hostname.strip('.'):
                raise SecurityError('Invalid URL format')
        elif (
            address.is_private
            or address.is_loopback
            or address.is_link_local
            or address.is_unspecified
        ):
            raise SecurityError('Access to private IP ranges is blocked')

        logger.debug(f"URL accepted: {url}")

    def _parse_ip(self, hostname: str):
        try:
            return ipaddress.ip_address(hostname)
        except ValueError:
            return None
