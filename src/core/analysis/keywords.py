#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Keyword tables driving the heuristic analyzer.

Plain data only. Swap in a different ``KeywordTables`` to change what
counts as a key point or as positive/negative wording.
"""

import re
from dataclasses import dataclass, field
from typing import Pattern, Tuple

WORDS_PER_MINUTE = 200

# Sentence terminals, ASCII and full-width
SENTENCE_TERMINALS = re.compile(r'[.!?。！？]+')

KEY_POINT_MIN_LENGTH = 10
MAX_KEY_POINTS = 5

PLACEHOLDER_TITLE = "Extracted Article Title"
PLACEHOLDER_AUTHOR = "Unknown Author"
PLACEHOLDER_SUMMARY = "Article summary not available"
PLACEHOLDER_KEY_POINT = "Key insights from the article"

DEFAULT_TAGS = ("微信公众号", "文章摘要")

# Importance / conclusion / suggestion markers
KEY_POINT_MARKERS = ("重要", "关键", "核心", "主要", "总结", "结论", "发现", "建议", "方法", "策略")

POSITIVE_WORDS = ("好", "优", "棒", "赞", "成功", "提升", "增长", "改善", "优化", "创新")
NEGATIVE_WORDS = ("差", "坏", "失败", "下降", "问题", "困难", "挑战", "风险")


def _alternation(words: Tuple[str, ...]) -> Pattern:
    return re.compile('|'.join(re.escape(word) for word in words))


@dataclass(frozen=True)
class KeywordTables:
    """Literal token sets used for key point and sentiment detection."""
    key_point_markers: Tuple[str, ...] = KEY_POINT_MARKERS
    positive_words: Tuple[str, ...] = POSITIVE_WORDS
    negative_words: Tuple[str, ...] = NEGATIVE_WORDS
    tags: Tuple[str, ...] = DEFAULT_TAGS

    _key_point_pattern: Pattern = field(init=False, repr=False, compare=False)
    _positive_pattern: Pattern = field(init=False, repr=False, compare=False)
    _negative_pattern: Pattern = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, '_key_point_pattern', _alternation(self.key_point_markers))
        object.__setattr__(self, '_positive_pattern', _alternation(self.positive_words))
        object.__setattr__(self, '_negative_pattern', _alternation(self.negative_words))

    def is_key_point(self, sentence: str) -> bool:
        return bool(self._key_point_pattern.search(sentence))

    def count_positive(self, text: str) -> int:
        return len(self._positive_pattern.findall(text))

    def count_negative(self, text: str) -> int:
        return len(self._negative_pattern.findall(text))


DEFAULT_TABLES = KeywordTables()
