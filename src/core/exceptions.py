#!/usr/bin/env python3
"""
Standardized exception hierarchy for the article summary pipeline.

Each pipeline stage fails with its own error kind. Only the outermost
invocation boundary catches them and turns them into one user-facing
message per kind (see ``user_message``).
"""

from typing import Optional, Dict, Any


class BenSightError(Exception):
    """Base exception for all pipeline errors."""

    user_message = "生成摘要失败，请稍后重试"

    def __init__(self, message: str, error_code: Optional[str] = None, context: Optional[Dict[str, Any]] = None):
        """
        Initialize base exception.

        Args:
            message: Human-readable error message
            error_code: Machine-readable error code
            context: Additional error context
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.context = context or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for logging/serialization."""
        return {
            'error_type': self.__class__.__name__,
            'error_code': self.error_code,
            'message': self.message,
            'user_message': self.user_message,
            'context': self.context
        }


class ValidationError(BenSightError):
    """Input URL does not match the accepted platform pattern."""

    user_message = "请输入有效的微信公众号文章链接"

    def __init__(self, url: str, issue: str):
        message = f"Invalid article URL {url!r}: {issue}"
        context = {
            'url': url,
            'issue': issue
        }
        super().__init__(message, context=context)


class FetchError(BenSightError):
    """Fetch gateway unreachable or returned an unusable response."""

    user_message = "无法获取文章内容，请检查网络后重试"

    def __init__(self, url: str, issue: str, status_code: Optional[int] = None,
                 original_error: Optional[Exception] = None):
        message = f"Failed to fetch {url}: {issue}"
        if status_code is not None:
            message += f" (HTTP {status_code})"
        context = {
            'url': url,
            'issue': issue,
            'status_code': status_code,
            'original_error': str(original_error) if original_error else None
        }
        super().__init__(message, context=context)
        self.status_code = status_code


class ExtractionError(BenSightError):
    """No usable content region, or the content is too short to summarize."""

    NO_CONTENT = "no_content"
    TOO_SHORT = "too_short"
    INVALID_MARKUP = "invalid_markup"

    _USER_MESSAGES = {
        NO_CONTENT: "无法提取文章内容，请检查链接是否有效",
        TOO_SHORT: "文章内容过短，无法生成摘要",
        INVALID_MARKUP: "无法提取文章内容，请检查链接是否有效",
    }

    def __init__(self, reason: str, length: int = 0, min_length: Optional[int] = None):
        if reason == self.TOO_SHORT:
            message = f"Extracted content too short: {length} < {min_length} characters"
        elif reason == self.INVALID_MARKUP:
            message = "Article markup is not a string"
        else:
            message = "No usable content found in article markup"
        context = {
            'reason': reason,
            'length': length,
            'min_length': min_length
        }
        super().__init__(message, context=context)
        self.reason = reason

    @property
    def user_message(self) -> str:
        return self._USER_MESSAGES.get(self.reason, self._USER_MESSAGES[self.NO_CONTENT])


class AnalysisError(BenSightError):
    """Malformed input reached the analyzer."""

    user_message = "文章分析失败，请稍后重试"

    def __init__(self, issue: str):
        super().__init__(f"Analysis failed: {issue}", context={'issue': issue})


class RenderError(BenSightError):
    """Rendering failed for a summary record."""

    user_message = "摘要页面生成失败，请稍后重试"

    def __init__(self, issue: str):
        super().__init__(f"Render failed: {issue}", context={'issue': issue})


class ConfigurationError(BenSightError):
    """Configuration is invalid or missing."""

    def __init__(self, config_key: str, issue: str):
        message = f"Configuration error for {config_key}: {issue}"
        context = {
            'config_key': config_key,
            'issue': issue
        }
        super().__init__(message, context=context)


def user_message(error: BaseException) -> str:
    """Map any error to the single message shown to the user for its kind."""
    if isinstance(error, BenSightError):
        return error.user_message
    return BenSightError.user_message
