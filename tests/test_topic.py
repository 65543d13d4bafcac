import pytest

from gcstore.topic import Topic


def test_display_format():
    topic = Topic(project_id="proj", topic="testing-is-important")
    assert str(topic) == "//pubsub.googleapis.com/projects/proj/topics/testing-is-important"


def test_to_json_matches_str():
    topic = Topic(project_id="proj", topic="news")
    assert topic.to_json() == str(topic)


def test_round_trip():
    topic = Topic(project_id="my-project", topic="my-topic")
    assert Topic.parse(topic.to_json()) == topic


def test_parse_fields():
    parsed = Topic.parse("//pubsub.googleapis.com/projects/abc/topics/xyz")
    assert parsed.project_id == "abc"
    assert parsed.topic == "xyz"


@pytest.mark.parametrize(
    "bad",
    [
        "",
        "pubsub.googleapis.com/projects/abc/topics/xyz",
        "//other.example.com/projects/abc/topics/xyz",
        "//pubsub.googleapis.com/projects/abc",
        "//pubsub.googleapis.com/projects/abc/subscriptions/xyz",
        "//pubsub.googleapis.com/projects/abc/topics",
    ],
)
def test_invalid_topic_raises(bad):
    with pytest.raises(ValueError, match="Invalid topic"):
        Topic.parse(bad)