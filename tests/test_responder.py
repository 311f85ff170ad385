import pytest

from david.services import responder
from david.services.knowledge_base import (
    GENERAL_RESPONSE,
    MENTAL_HEALTH,
    PREVENTION,
    QUARANTINE,
    SYMPTOMS,
    TEMPERATURE,
    TESTING,
    TOPICS,
    VACCINATION,
)


@pytest.mark.parametrize(
    "message, topic",
    [
        ("apa gejala covid?", SYMPTOMS),
        ("berapa suhu normal?", TEMPERATURE),
        ("kapan booster?", VACCINATION),
        ("pencegahan covid", PREVENTION),
        ("where can i get a pcr", TESTING),
        ("lockdown rules", QUARANTINE),
        ("i feel anxiety", MENTAL_HEALTH),
    ],
)
def test_single_bucket_keyword(message, topic):
    assert responder.classify(message) == topic.response
    assert responder.match_topic(message) is topic


def test_symptoms_declared_before_temperature():
    # "demam" is a keyword of both buckets
    assert responder.classify("saya demam dan batuk") == SYMPTOMS.response
    assert responder.classify("fever thermometer") == SYMPTOMS.response


def test_first_declared_bucket_wins():
    assert responder.classify("vaccine test") == VACCINATION.response
    assert responder.classify("isolation stress") == QUARANTINE.response


def test_empty_message_gets_general_response():
    assert responder.classify("") == GENERAL_RESPONSE
    assert responder.match_topic("") is None


def test_unknown_text_gets_general_response():
    assert responder.classify("hello there") == GENERAL_RESPONSE


def test_case_insensitive():
    assert responder.classify("GEJALA") == responder.classify("gejala") == SYMPTOMS.response
    assert responder.classify("Kapan BOOSTER?") == VACCINATION.response


def test_plain_substring_match_without_tokenizing():
    # "latest" contains "tes"
    assert responder.classify("latest news") == TESTING.response


def test_custom_order_changes_precedence():
    assert responder.classify("fever", topics=(TEMPERATURE, SYMPTOMS)) == TEMPERATURE.response


def test_declared_order():
    assert [t.name for t in TOPICS] == [
        "symptoms",
        "temperature",
        "vaccination",
        "prevention",
        "testing",
        "quarantine",
        "mental_health",
    ]
