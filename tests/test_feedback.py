from datetime import datetime, timedelta

import pytest

from echovid.models.comment import Comment
from echovid.models.rating import Rating
from echovid.models.video import Video
from echovid.repositories.rating_repository import rating_summary


@pytest.fixture
def video(db, creator):
    video = Video(
        title="Night Drive",
        blob_url="https://blobs.example.test/videos/videos/night.mp4",
        object_name="videos/night.mp4",
        creator_id=creator.id,
    )
    db.add(video)
    db.commit()
    db.refresh(video)
    return video


# ---------- Comments ----------


def test_comment_requires_token(client, video):
    res = client.post("/comment", json={"videoId": video.id, "comment": "great"})
    assert res.status_code == 401


def test_any_role_can_comment(client, db, video, consumer, creator, auth_header):
    for user in (consumer, creator):
        res = client.post("/comment", json={"videoId": video.id, "comment": f"from {user.name}"}, headers=auth_header(user))
        assert res.status_code == 200
        assert res.json() == {"message": "Comment added"}
    assert db.query(Comment).count() == 2


def test_comment_on_unknown_video(client, consumer, auth_header):
    res = client.post("/comment", json={"videoId": "missing", "comment": "hello"}, headers=auth_header(consumer))
    assert res.status_code == 404


def test_blank_comment_rejected(client, video, consumer, auth_header):
    res = client.post("/comment", json={"videoId": video.id, "comment": "   "}, headers=auth_header(consumer))
    assert res.status_code == 400


def test_get_comments_newest_first_with_author_name(client, db, video, consumer, creator):
    base = datetime(2026, 3, 1, 9, 0, 0)
    db.add_all([
        Comment(video_id=video.id, user_id=consumer.id, comment_text="first", created_at=base),
        Comment(video_id=video.id, user_id=creator.id, comment_text="second", created_at=base + timedelta(seconds=30)),
        Comment(video_id=video.id, user_id=consumer.id, comment_text="third", created_at=base + timedelta(minutes=5)),
    ])
    db.commit()

    res = client.get(f"/getComments/{video.id}")
    assert res.status_code == 200
    comments = res.json()
    assert [c["commentText"] for c in comments] == ["third", "second", "first"]
    assert [c["name"] for c in comments] == ["Viewer", "Studio", "Viewer"]
    assert all("createdAt" in c for c in comments)


def test_get_comments_for_video_without_comments(client, video):
    res = client.get(f"/getComments/{video.id}")
    assert res.status_code == 200
    assert res.json() == []


# ---------- Ratings ----------


def test_rate_requires_token(client, video):
    assert client.post("/rate", json={"videoId": video.id, "rating": 4}).status_code == 401


def test_ratings_average(client, video, consumer, creator, auth_header):
    assert client.post("/rate", json={"videoId": video.id, "rating": 3}, headers=auth_header(consumer)).status_code == 200
    res = client.post("/rate", json={"videoId": video.id, "rating": 5}, headers=auth_header(creator))
    assert res.status_code == 200
    assert res.json() == {"message": "Rating submitted"}

    res = client.get(f"/getRatings/{video.id}")
    assert res.status_code == 200
    assert res.json() == {"avgRating": 4, "totalRatings": 2}


def test_repeat_ratings_by_same_user_are_all_counted(client, db, video, consumer, auth_header):
    for value in (1, 2, 5):
        client.post("/rate", json={"videoId": video.id, "rating": value}, headers=auth_header(consumer))
    assert db.query(Rating).filter(Rating.user_id == consumer.id).count() == 3
    assert client.get(f"/getRatings/{video.id}").json() == {
        "avgRating": pytest.approx(8 / 3),
        "totalRatings": 3,
    }


def test_ratings_summary_without_ratings(client, video):
    res = client.get(f"/getRatings/{video.id}")
    assert res.status_code == 200
    assert res.json() == {"avgRating": None, "totalRatings": 0}


@pytest.mark.parametrize("value", [0, 6, -1])
def test_rating_out_of_range_rejected(client, db, video, consumer, auth_header, value):
    res = client.post("/rate", json={"videoId": video.id, "rating": value}, headers=auth_header(consumer))
    assert res.status_code == 400
    assert db.query(Rating).count() == 0


def test_rate_unknown_video(client, consumer, auth_header):
    res = client.post("/rate", json={"videoId": "missing", "rating": 4}, headers=auth_header(consumer))
    assert res.status_code == 404


def test_rating_summary_only_counts_its_video(db, video, creator, consumer):
    other = Video(title="Other", blob_url="u", object_name="videos/o.mp4", creator_id=creator.id)
    db.add(other)
    db.commit()
    db.add_all([
        Rating(video_id=video.id, user_id=consumer.id, rating=2),
        Rating(video_id=other.id, user_id=consumer.id, rating=5),
    ])
    db.commit()
    assert rating_summary(db, video.id) == (2.0, 1)
