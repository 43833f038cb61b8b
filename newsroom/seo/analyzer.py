"""
Content Analyzer

Grades an article's text in three independent buckets and reports the
individual checks behind each grade:

- SEO (40 raw points): title and meta description length, focus keyphrase
  placement
- Readability (30 raw points): average sentence and paragraph length
- AI readiness (30 raw points): subheadings, a concise intro, bullet lists

Each bucket is scaled to 0-100. Analysis is a pure function of the text;
persisting the scores is the job of newsroom.seo.service.
"""

import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from newsroom.utils import round_half_up, split_sentences, split_paragraphs, split_words

SEO_MAX_POINTS = 40
READABILITY_MAX_POINTS = 30
AI_MAX_POINTS = 30

# (min, max) inclusive character ranges
TITLE_IDEAL = (50, 60)
TITLE_ACCEPTABLE = (30, 70)
META_IDEAL = (150, 160)
META_ACCEPTABLE = (120, 200)

SENTENCE_GOOD_MAX = 20
SENTENCE_OK_MAX = 25
PARAGRAPH_GOOD_MAX = 100
PARAGRAPH_OK_MAX = 150
INTRO_MAX_WORDS = 100

SUBHEADING_PATTERN = re.compile(r'##\s|<h2', re.IGNORECASE)
BULLET_PATTERN = re.compile(r'^[-*]\s|<li', re.IGNORECASE | re.MULTILINE)

CATEGORY_SEO = 'seo'
CATEGORY_READABILITY = 'readability'
CATEGORY_AI = 'ai'

STATUS_GOOD = 'good'
STATUS_WARNING = 'warning'
STATUS_BAD = 'bad'


@dataclass
class SEOCheck:
    """One diagnostic line of an analysis."""
    id: str
    category: str
    status: str
    message: str

    def to_dict(self) -> Dict[str, str]:
        return {
            'id': self.id,
            'category': self.category,
            'status': self.status,
            'message': self.message,
        }


@dataclass
class SEOAnalysis:
    seo_score: int
    readability_score: int
    ai_readiness_score: int
    checks: List[SEOCheck] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'seoScore': self.seo_score,
            'readabilityScore': self.readability_score,
            'aiReadinessScore': self.ai_readiness_score,
            'checks': [check.to_dict() for check in self.checks],
        }


def _in_range(value: float, bounds) -> bool:
    low, high = bounds
    return low <= value <= high


def scale_score(points: float, max_points: float) -> int:
    return round_half_up(min(100, points / max_points * 100))


def _check_title(title: str, checks: List[SEOCheck]) -> int:
    length = len(title)
    if _in_range(length, TITLE_IDEAL):
        checks.append(SEOCheck('title-length', CATEGORY_SEO, STATUS_GOOD,
                               f'Title length is optimal ({length} chars)'))
        return 10
    if _in_range(length, TITLE_ACCEPTABLE):
        checks.append(SEOCheck('title-length', CATEGORY_SEO, STATUS_WARNING,
                               f'Title could be improved ({length} chars, ideal: 50-60)'))
        return 5
    problem = 'too short' if length < TITLE_ACCEPTABLE[0] else 'too long'
    checks.append(SEOCheck('title-length', CATEGORY_SEO, STATUS_BAD,
                           f'Title is {problem} ({length} chars)'))
    return 0


def _check_description(description: str, checks: List[SEOCheck]) -> int:
    length = len(description)
    if _in_range(length, META_IDEAL):
        checks.append(SEOCheck('meta-length', CATEGORY_SEO, STATUS_GOOD,
                               f'Meta description is optimal ({length} chars)'))
        return 10
    if _in_range(length, META_ACCEPTABLE):
        checks.append(SEOCheck('meta-length', CATEGORY_SEO, STATUS_WARNING,
                               f'Meta description could be improved ({length} chars)'))
        return 5
    problem = 'too short' if length < META_ACCEPTABLE[0] else 'too long'
    checks.append(SEOCheck('meta-length', CATEGORY_SEO, STATUS_BAD,
                           f'Meta description is {problem} ({length} chars)'))
    return 0


def _check_keyphrase(keyphrase: str, title: str, description: str, checks: List[SEOCheck]) -> int:
    if not keyphrase:
        checks.append(SEOCheck('keyphrase-missing', CATEGORY_SEO, STATUS_WARNING,
                               'No focus keyphrase set'))
        return 0

    points = 0
    if keyphrase in title.lower():
        points += 10
        checks.append(SEOCheck('keyphrase-title', CATEGORY_SEO, STATUS_GOOD,
                               'Focus keyphrase appears in title'))
    else:
        checks.append(SEOCheck('keyphrase-title', CATEGORY_SEO, STATUS_WARNING,
                               'Add focus keyphrase to title'))

    if keyphrase in description.lower():
        points += 10
        checks.append(SEOCheck('keyphrase-meta', CATEGORY_SEO, STATUS_GOOD,
                               'Focus keyphrase appears in meta description'))
    else:
        checks.append(SEOCheck('keyphrase-meta', CATEGORY_SEO, STATUS_WARNING,
                               'Add focus keyphrase to meta description'))
    return points


def _check_readability(body: str, checks: List[SEOCheck]) -> int:
    words = len(split_words(body))
    sentences = len(split_sentences(body))
    paragraphs = len(split_paragraphs(body))
    points = 0

    avg_sentence = words / max(sentences, 1)
    if avg_sentence <= SENTENCE_GOOD_MAX:
        points += 15
        checks.append(SEOCheck('sentence-length', CATEGORY_READABILITY, STATUS_GOOD,
                               f'Sentence length is good ({round_half_up(avg_sentence)} words avg)'))
    elif avg_sentence <= SENTENCE_OK_MAX:
        points += 8
        checks.append(SEOCheck('sentence-length', CATEGORY_READABILITY, STATUS_WARNING,
                               f'Sentences are slightly long ({round_half_up(avg_sentence)} words avg)'))
    else:
        checks.append(SEOCheck('sentence-length', CATEGORY_READABILITY, STATUS_BAD,
                               'Sentences are too long, consider breaking them up'))

    avg_paragraph = words / max(paragraphs, 1)
    if avg_paragraph <= PARAGRAPH_GOOD_MAX:
        points += 15
        checks.append(SEOCheck('paragraph-length', CATEGORY_READABILITY, STATUS_GOOD,
                               'Paragraphs are well structured'))
    elif avg_paragraph <= PARAGRAPH_OK_MAX:
        points += 8
        checks.append(SEOCheck('paragraph-length', CATEGORY_READABILITY, STATUS_WARNING,
                               'Some paragraphs could be shorter'))
    else:
        checks.append(SEOCheck('paragraph-length', CATEGORY_READABILITY, STATUS_BAD,
                               'Paragraphs are too long'))
    return points


def _check_ai_readiness(body: str, checks: List[SEOCheck]) -> int:
    points = 0

    if SUBHEADING_PATTERN.search(body):
        points += 10
        checks.append(SEOCheck('subheadings', CATEGORY_AI, STATUS_GOOD,
                               'Subheadings present'))
    else:
        checks.append(SEOCheck('subheadings', CATEGORY_AI, STATUS_WARNING,
                               'Add H2 subheadings for better structure'))

    paragraphs = split_paragraphs(body)
    intro_words = len(split_words(paragraphs[0])) if paragraphs else 0
    if 0 < intro_words <= INTRO_MAX_WORDS:
        points += 10
        checks.append(SEOCheck('clear-intro', CATEGORY_AI, STATUS_GOOD,
                               'Intro is concise'))
    elif intro_words > INTRO_MAX_WORDS:
        checks.append(SEOCheck('clear-intro', CATEGORY_AI, STATUS_WARNING,
                               f'Intro is too long (keep under {INTRO_MAX_WORDS} words)'))

    if BULLET_PATTERN.search(body):
        points += 10
        checks.append(SEOCheck('bullet-points', CATEGORY_AI, STATUS_GOOD,
                               'Bullet points found'))
    else:
        checks.append(SEOCheck('bullet-points', CATEGORY_AI, STATUS_WARNING,
                               'Consider adding bullet points'))
    return points


def analyze_article(
    title: Optional[str],
    excerpt: Optional[str],
    body: Optional[str],
    seo_title: Optional[str] = None,
    seo_description: Optional[str] = None,
    focus_keyphrase: Optional[str] = None
) -> SEOAnalysis:
    """
    Score article text for SEO, readability and AI readiness.

    The SEO title and description fall back to the article title and excerpt
    when unset. Calling this twice with the same text returns equal results.
    """
    effective_title = seo_title or title or ''
    description = seo_description or excerpt or ''
    keyphrase = (focus_keyphrase or '').strip().lower()
    body = body or ''

    checks: List[SEOCheck] = []

    seo_points = _check_title(effective_title, checks)
    seo_points += _check_description(description, checks)
    seo_points += _check_keyphrase(keyphrase, effective_title, description, checks)

    readability_points = _check_readability(body, checks)
    ai_points = _check_ai_readiness(body, checks)

    return SEOAnalysis(
        seo_score=scale_score(seo_points, SEO_MAX_POINTS),
        readability_score=scale_score(readability_points, READABILITY_MAX_POINTS),
        ai_readiness_score=scale_score(ai_points, AI_MAX_POINTS),
        checks=checks,
    )


def analyze_model(article) -> SEOAnalysis:
    """Analyze a stored Article."""
    return analyze_article(
        article.title,
        article.excerpt,
        article.body,
        seo_title=article.seo_title,
        seo_description=article.seo_description,
        focus_keyphrase=article.focus_keyphrase,
    )


def score_label(score: Optional[int]) -> str:
    score = score or 0
    if score >= 80:
        return 'Excellent'
    if score >= 60:
        return 'Good'
    if score >= 40:
        return 'Needs improvement'
    return 'Poor'
