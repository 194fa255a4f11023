import pytest

from livescribe.models.transcript import Sentiment
from livescribe.transcription.classifier import ContentClassifier, TMC_KEYWORDS


@pytest.fixture
def classifier():
    return ContentClassifier()


@pytest.mark.unit
class TestContentClassifier:

    def test_bjp_mention_english(self, classifier):
        analysis = classifier.classify("PM Modi addressed a rally in Kolkata")
        assert analysis.bjp_mention
        assert not analysis.tmc_mention
        assert analysis.is_political

    def test_tmc_mention_bengali(self, classifier):
        analysis = classifier.classify("মমতা আজ সভা করলেন")
        assert analysis.tmc_mention
        assert not analysis.bjp_mention

    def test_bjp_mention_hindi(self, classifier):
        assert classifier.classify("भाजपा की बैठक").bjp_mention

    def test_both_parties(self, classifier):
        analysis = classifier.classify("BJP and TMC clash ahead of polls")
        assert analysis.bjp_mention and analysis.tmc_mention

    def test_case_insensitive(self, classifier):
        assert classifier.classify("TRINAMOOL workers gathered").tmc_mention

    def test_no_mention(self, classifier):
        analysis = classifier.classify("Heavy rain expected tomorrow")
        assert not analysis.is_political
        assert analysis.sentiment == Sentiment.NEUTRAL

    def test_substring_match_inside_other_words(self, classifier):
        # Known limitation of substring matching: "shah" inside "shahi"
        assert classifier.classify("the shahi paneer was excellent").bjp_mention

    def test_positive_sentiment(self, classifier):
        assert classifier.classify("a big victory and real development").sentiment == Sentiment.POSITIVE

    def test_negative_sentiment(self, classifier):
        assert classifier.classify("the scandal deepened the crisis").sentiment == Sentiment.NEGATIVE

    def test_tie_is_neutral(self, classifier):
        assert classifier.classify("win or loss").sentiment == Sentiment.NEUTRAL

    def test_repeated_word_counts_once(self, classifier):
        analysis = classifier.classify("success success success but a crisis and a scandal")
        assert analysis.sentiment == Sentiment.NEGATIVE

    def test_sentiment_in_devanagari(self, classifier):
        assert classifier.classify("यह बड़ी जीत है").sentiment == Sentiment.POSITIVE

    def test_custom_keywords_are_lowercased(self):
        classifier = ContentClassifier(bjp_keywords=["Lotus Party"], tmc_keywords=["Grassroots"])
        analysis = classifier.classify("the lotus party met grassroots workers")
        assert analysis.bjp_mention and analysis.tmc_mention
        assert not classifier.classify("modi").bjp_mention

    def test_default_keywords_have_no_duplicates(self):
        assert len(set(TMC_KEYWORDS)) == len(TMC_KEYWORDS)


@pytest.mark.unit
@pytest.mark.parametrize("text, expected", [
    ("victory brings growth despite the crisis", Sentiment.POSITIVE),
    ("the crisis came before growth and victory", Sentiment.POSITIVE),
    ("scandal and crisis despite one victory", Sentiment.NEGATIVE),
    ("loss after a win", Sentiment.NEUTRAL),
    ("Heavy rain expected tomorrow", Sentiment.NEUTRAL),
    ("", Sentiment.NEUTRAL),
])
def test_sentiment_counts(text, expected):
    assert ContentClassifier().classify(text).sentiment == expected


@pytest.mark.unit
@pytest.mark.parametrize("text", [
    "",
    "BJP and TMC clash after the defeat",
    "মমতা বন্দ্যোপাধ্যায়ের সাফল্য",
    "मोदी की जीत और संकट",
])
def test_classify_is_idempotent(text):
    classifier = ContentClassifier()
    assert classifier.classify(text) == classifier.classify(text)
