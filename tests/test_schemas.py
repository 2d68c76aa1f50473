import ast
from pathlib import Path

import pytest

from echovid.config import Settings
from echovid.schemas.comment import CommentCreate, CommentResponse
from echovid.schemas.rating import RatingCreate, RatingSummary
from echovid.schemas.user import UserResponse
from echovid.schemas.video import VideoResponse, VideoUploadRequest

PACKAGE_DIR = Path(__file__).resolve().parent.parent / "echovid"

ALIASED_SCHEMAS = [
    CommentCreate,
    CommentResponse,
    RatingCreate,
    RatingSummary,
    UserResponse,
    VideoResponse,
    VideoUploadRequest,
]


@pytest.mark.parametrize("schema", ALIASED_SCHEMAS, ids=lambda s: s.__name__)
def test_schema_accepts_field_names_and_aliases(schema):
    assert schema.model_config["populate_by_name"] is True


def test_orm_backed_schemas_read_attributes():
    assert UserResponse.model_config["from_attributes"] is True
    assert VideoResponse.model_config["from_attributes"] is True


def test_settings_use_env_file():
    assert Settings.model_config["env_file"] == ".env"


@pytest.mark.parametrize(
    "path",
    sorted(PACKAGE_DIR.rglob("*.py")),
    ids=lambda p: str(p.relative_to(PACKAGE_DIR)),
)
def test_no_class_based_model_config(path):
    # pydantic v2 deprecates the inner `class Config`; model_config = ConfigDict(...) replaces it
    tree = ast.parse(path.read_text())
    nested = [
        f"{node.name}.Config"
        for node in ast.walk(tree)
        if isinstance(node, ast.ClassDef)
        for child in node.body
        if isinstance(child, ast.ClassDef) and child.name == "Config"
    ]
    assert nested == []


def test_alias_and_field_name_both_populate():
    by_alias = RatingCreate(videoId="v1", rating=4)
    by_name = RatingCreate(video_id="v1", rating=4)
    assert by_alias == by_name
    assert RatingSummary(avg_rating=None, total_ratings=0).model_dump(by_alias=True) == {
        "avgRating": None,
        "totalRatings": 0,
    }
