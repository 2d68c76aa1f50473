from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from echovid.auth import get_current_principal
from echovid.database import get_db
from echovid.repositories.comment_repository import add_comment, list_comments
from echovid.schemas.comment import CommentCreate, CommentResponse
from echovid.schemas.user import MessageResponse, TokenPayload

router = APIRouter(tags=["comments"])


@router.post("/comment", response_model=MessageResponse)
def comment(
    body: CommentCreate,
    principal: TokenPayload = Depends(get_current_principal),
    db: Session = Depends(get_db),
):
    add_comment(db, body.video_id, principal.sub, body.comment)
    return MessageResponse(message="Comment added")


@router.get("/getComments/{video_id}", response_model=list[CommentResponse])
def get_comments(video_id: str, db: Session = Depends(get_db)):
    return [CommentResponse(**row) for row in list_comments(db, video_id)]
