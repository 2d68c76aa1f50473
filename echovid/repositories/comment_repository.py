from sqlalchemy import desc
from sqlalchemy.orm import Session

from echovid.errors import NotFound
from echovid.models.comment import Comment
from echovid.models.user import User
from echovid.repositories.video_repository import video_exists


def add_comment(db: Session, video_id: str, user_id: str, text: str) -> Comment:
    if not video_exists(db, video_id):
        raise NotFound("Video not found")
    comment = Comment(video_id=video_id, user_id=user_id, comment_text=text)
    db.add(comment)
    db.commit()
    db.refresh(comment)
    return comment


def list_comments(db: Session, video_id: str) -> list[dict]:
    """
    Comments on a video, newest first, with the author's display name.
    Returns list of {"comment_text", "name", "created_at"}.
    """
    rows = (
        db.query(Comment.comment_text, User.name, Comment.created_at)
        .join(User, User.id == Comment.user_id)
        .filter(Comment.video_id == video_id)
        .order_by(desc(Comment.created_at))
        .all()
    )
    return [
        {"comment_text": text, "name": name, "created_at": created_at}
        for text, name, created_at in rows
    ]
