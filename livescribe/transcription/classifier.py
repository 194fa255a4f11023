"""Keyword-based detection of BJP/TMC mentions and sentiment.

Matching is case-insensitive substring search, so a short keyword can match
inside an unrelated word. That is a known limitation of the heuristic.
"""

from typing import Iterable, Optional, Tuple

from ..models.transcript import ContentAnalysis, Sentiment

BJP_KEYWORDS: Tuple[str, ...] = (
    'bjp', 'bharatiya janata', 'modi', 'narendra modi', 'pm modi',
    'amit shah', 'sukanta', 'suvendu', 'adhikari', 'dilip ghosh',
    'jp nadda', 'yogi', 'shah', 'saffron', 'lotus', 'kamal',
    'বিজেপি', 'মোদি', 'অমিত শাহ', 'সুকান্ত', 'শুভেন্দু', 'দিলীপ ঘোষ',
    'भाजपा', 'मोदी', 'अमित शाह', 'बीजेपी',
)

TMC_KEYWORDS: Tuple[str, ...] = (
    'tmc', 'trinamool', 'mamata', 'banerjee', 'didi', 'abhishek',
    'all india trinamool', 'grassroots', 'firhad hakim',
    'partha chatterjee', 'anubrata', 'mondal', 'kunal ghosh',
    'তৃণমূল', 'মমতা', 'দিদি', 'অভিষেক', 'বন্দ্যোপাধ্যায়',
    'तृणमूल', 'ममता', 'दीदी', 'टीएमसी',
)

POSITIVE_WORDS: Tuple[str, ...] = (
    'success', 'win', 'victory', 'growth', 'development',
    'সাফল্য', 'উন্নয়ন', 'जीत', 'विकास',
)

NEGATIVE_WORDS: Tuple[str, ...] = (
    'fail', 'loss', 'defeat', 'crisis', 'scandal',
    'ব্যর্থ', 'সংকট', 'हार', 'संकट',
)


class ContentClassifier:
    """Flags topical mentions and assigns a coarse sentiment label."""

    def __init__(self,
                 bjp_keywords: Optional[Iterable[str]] = None,
                 tmc_keywords: Optional[Iterable[str]] = None,
                 positive_words: Optional[Iterable[str]] = None,
                 negative_words: Optional[Iterable[str]] = None):
        self.bjp_keywords = self._normalize(bjp_keywords, BJP_KEYWORDS)
        self.tmc_keywords = self._normalize(tmc_keywords, TMC_KEYWORDS)
        self.positive_words = self._normalize(positive_words, POSITIVE_WORDS)
        self.negative_words = self._normalize(negative_words, NEGATIVE_WORDS)

    @staticmethod
    def _normalize(words: Optional[Iterable[str]], default: Tuple[str, ...]) -> Tuple[str, ...]:
        # Duplicates would double-count in the sentiment tally
        source = default if words is None else words
        return tuple(dict.fromkeys(w.lower() for w in source))

    def classify(self, text: str) -> ContentAnalysis:
        lower_text = text.lower()

        bjp_mention = any(k in lower_text for k in self.bjp_keywords)
        tmc_mention = any(k in lower_text for k in self.tmc_keywords)

        positive_count = sum(1 for w in self.positive_words if w in lower_text)
        negative_count = sum(1 for w in self.negative_words if w in lower_text)

        if positive_count > negative_count:
            sentiment = Sentiment.POSITIVE
        elif negative_count > positive_count:
            sentiment = Sentiment.NEGATIVE
        else:
            sentiment = Sentiment.NEUTRAL

        return ContentAnalysis(bjp_mention=bjp_mention, tmc_mention=tmc_mention, sentiment=sentiment)
