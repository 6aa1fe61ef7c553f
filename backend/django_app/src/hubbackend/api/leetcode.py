import logging
import re

import requests
from django.conf import settings

from hubbackend.api.errors import ValidationFailed

logger = logging.getLogger(__name__)

PROBLEM_URL_MARKER = 'leetcode.com/problems/'
USER_AGENT = (
    'Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 '
    '(KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36'
)
DEFAULT_TAG = 'Algorithm'
MAX_TAGS = 5

KNOWN_TOPICS = [
    'Array', 'String', 'Hash Table', 'Dynamic Programming', 'Math',
    'Two Pointers', 'Binary Search', 'Tree', 'Depth-First Search',
    'Breadth-First Search', 'Greedy', 'Backtracking', 'Stack', 'Queue',
    'Linked List', 'Binary Tree', 'Graph', 'Heap', 'Sorting', 'Recursion',
    'Sliding Window', 'Union Find', 'Trie', 'Bit Manipulation', 'Design',
]
URL_TOPICS = {'array': 'Array', 'string': 'String', 'tree': 'Tree', 'graph': 'Graph'}

_TITLE_RE = re.compile(r'<title[^>]*>([^<]+)</title>', re.IGNORECASE)
_NUMBER_PREFIX_RE = re.compile(r'^\d+\.\s*')
_DIFFICULTY_RE = re.compile(r'"difficulty"\s*:\s*"(Easy|Medium|Hard)"', re.IGNORECASE)


def parse_title(html):
    match = _TITLE_RE.search(html)
    if not match:
        return 'Unknown Problem'
    title = match.group(1).replace(' - LeetCode', '')
    return _NUMBER_PREFIX_RE.sub('', title.strip()).strip()


def parse_difficulty(html):
    match = _DIFFICULTY_RE.search(html)
    if match:
        return match.group(1).upper()
    for word in ('Easy', 'Hard', 'Medium'):
        if word in html or word.lower() in html:
            return word.upper()
    return 'MEDIUM'


def parse_tags(html, url):
    lower = html.lower()
    tags = [topic for topic in KNOWN_TOPICS if topic.lower() in lower][:MAX_TAGS]
    if not tags:
        lower_url = url.lower()
        tags = [topic for word, topic in URL_TOPICS.items() if word in lower_url]
    return tags or [DEFAULT_TAG]


def slug_title(url):
    parts = url.split('/')
    slug = ''
    if 'problems' in parts:
        index = parts.index('problems')
        if index + 1 < len(parts):
            slug = parts[index + 1]
    slug = slug or 'unknown-problem'
    return ' '.join(word[:1].upper() + word[1:] for word in slug.split('-'))


def fetch_page(url):
    response = requests.get(
        url,
        headers={'User-Agent': USER_AGENT},
        timeout=settings.LEETCODE_FETCH_TIMEOUT,
    )
    response.raise_for_status()
    return response.text


def extract_problem(url):
    url = (url or '').strip() if isinstance(url, str) else ''
    if not url:
        raise ValidationFailed('URL is required')
    if PROBLEM_URL_MARKER not in url:
        raise ValidationFailed('Please provide a valid LeetCode problem URL')

    try:
        html = fetch_page(url)
    except requests.RequestException as e:
        logger.warning("could not fetch %s: %s", url, e)
        return {
            "title": slug_title(url),
            "difficulty": 'MEDIUM',
            "tags": [DEFAULT_TAG],
            "url": url,
            "fallback": True,
        }

    return {
        "title": parse_title(html),
        "difficulty": parse_difficulty(html),
        "tags": parse_tags(html, url),
        "url": url,
    }
