from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class ApiModel(BaseModel):
    # Server JSON is camelCase with Mongo-style "_id".
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    def to_payload(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")


class PostType(str, Enum):
    RECIPE = "recipe"
    DIY = "diy"


class PostStatus(str, Enum):
    DRAFT = "draft"
    PUBLISHED = "published"


class ReportCategory(str, Enum):
    SPAM = "spam"
    HARASSMENT = "harassment"
    INAPPROPRIATE_CONTENT = "inappropriate-content"
    IMPERSONATION = "impersonation"
    OTHER = "other"


class VendorReportCategory(str, Enum):
    INCORRECT_INFORMATION = "incorrect-information"
    CLOSED_PERMANENTLY = "closed-permanently"
    DUPLICATE = "duplicate"
    INAPPROPRIATE_CONTENT = "inappropriate-content"
    SPAM = "spam"
    SCAM_FRAUD = "scam-fraud"
    SAFETY_CONCERN = "safety-concern"
    OTHER = "other"


class StepMaterial(ApiModel):
    name: str
    quantity: str = ""
    unit: str = ""
    estimated_cost: float = 0
    calories: float = 0


class Step(ApiModel):
    step_number: int
    title: str = ""
    instruction: str = ""
    estimated_time: float = 0
    estimated_cost: float = 0
    notes: str = ""
    materials: List[StepMaterial] = Field(default_factory=list)


class Ingredient(ApiModel):
    name: str
    quantity: str = "1"
    unit: str = ""
    estimated_cost: Optional[float] = None
    calories: Optional[float] = None


class Material(ApiModel):
    name: str
    quantity: str = "1"
    optional: bool = False
    estimated_cost: Optional[float] = None


def renumber_steps(steps: List[Step]) -> List[Step]:
    """Return the steps numbered 1..N in their current order."""
    return [step.model_copy(update={"step_number": idx}) for idx, step in enumerate(steps, start=1)]


class Post(ApiModel):
    id: Optional[str] = Field(default=None, alias="_id")
    title: str
    description: str = ""
    type: PostType
    status: PostStatus = PostStatus.DRAFT
    steps: List[Step] = Field(default_factory=list)
    ingredients: List[Ingredient] = Field(default_factory=list)
    materials: List[Material] = Field(default_factory=list)
    tags: List[str] = Field(default_factory=list)
    author: Optional[Any] = None
    like_count: int = 0
    bookmark_count: int = 0
    comment_count: int = 0
    share_count: int = 0
    views: int = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_validator("steps")
    @classmethod
    def _contiguous_steps(cls, steps: List[Step]) -> List[Step]:
        ordered = sorted(steps, key=lambda s: s.step_number)
        if [s.step_number for s in ordered] != list(range(1, len(ordered) + 1)):
            return renumber_steps(ordered)
        return ordered

    def add_step(self, instruction: str, title: str = "", **fields: Any) -> Step:
        step = Step(step_number=len(self.steps) + 1, title=title, instruction=instruction, **fields)
        self.steps.append(step)
        return step

    def remove_step(self, step_number: int) -> Step:
        index = step_number - 1
        if index < 0 or index >= len(self.steps):
            raise IndexError(f"no step {step_number} in a post with {len(self.steps)} steps")
        removed = self.steps[index]
        self.steps = renumber_steps(self.steps[:index] + self.steps[index + 1:])
        return removed

    @property
    def items(self) -> List[ApiModel]:
        return list(self.ingredients) if self.type == PostType.RECIPE else list(self.materials)


class Comment(ApiModel):
    id: str = Field(alias="_id")
    post: Optional[Any] = None
    author: Optional[Any] = None
    text: str
    parent_comment: Optional[Any] = None
    like_count: int = 0
    is_liked: bool = False
    is_edited: bool = False
    replies: List["Comment"] = Field(default_factory=list)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_validator("replies", mode="before")
    @classmethod
    def _populated_replies(cls, replies: Any) -> List[Any]:
        # Unpopulated documents carry reply ids only; those are loaded separately.
        return [reply for reply in replies or [] if not isinstance(reply, str)]


class Pagination(ApiModel):
    current_page: int = 1
    total_pages: int = 0
    total_comments: int = 0
    has_next_page: bool = False


class InteractionRecord(ApiModel):
    is_liked: bool = False
    like_count: int = 0
    is_bookmarked: bool = False
    bookmark_count: int = 0
    comment_count: int = 0
    share_count: int = 0
    views: int = 0


class ShareResult(ApiModel):
    share_url: str = ""
    share_count: int = 0


class Report(ApiModel):
    reported_user_id: str
    category: ReportCategory = ReportCategory.SPAM
    reason: str
    post_id: Optional[str] = None
    post_title: Optional[str] = None

    @field_validator("reason")
    @classmethod
    def _reason_detail(cls, value: str) -> str:
        value = value.strip()
        if len(value) < 10:
            raise ValueError("reason must be at least 10 characters")
        return value


class VendorReport(ApiModel):
    vendor_id: str
    category: VendorReportCategory
    reason: str

    @field_validator("reason")
    @classmethod
    def _reason_detail(cls, value: str) -> str:
        value = value.strip()
        if len(value) < 10:
            raise ValueError("reason must be at least 10 characters")
        return value


class Suggestion(ApiModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")

    title: str = ""
    ideas: List[str] = Field(default_factory=list)
    nutrition: Optional[Dict[str, Any]] = None
    extras: Optional[Dict[str, Any]] = None
    provider: Dict[str, Any] = Field(default_factory=dict)
    fallback: bool = False


class RecipeDetail(ApiModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")

    title: str = ""
    description: str = ""
    servings: Optional[float] = None
    prep_time: str = ""
    cook_time: str = ""
    total_time: str = ""
    difficulty: str = ""
    ingredients: List[Dict[str, Any]] = Field(default_factory=list)
    instructions: List[Dict[str, Any]] = Field(default_factory=list)
    nutrition: Optional[Dict[str, Any]] = None
    tips: List[str] = Field(default_factory=list)
    variations: List[str] = Field(default_factory=list)
    storage: str = ""
