from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class RecentView(BaseModel):
    timestamp: datetime = Field(..., description="When the view was recorded (UTC).")
    camo_id: str = Field("", description="Identifier parsed from the proxy user agent.")
    user_agent: str = Field("", description="Raw User-Agent header of the fetch.")


class StatsResponse(BaseModel):
    total_views: int = Field(..., title="Total Views", description="Count of all views ever recorded.")
    views_today: int = Field(..., title="Views Today", description="Views in the last 24 hours.")
    views_this_week: int = Field(..., title="Views This Week", description="Views in the last 7 days.")
    recent_views: list[RecentView] = Field(
        default_factory=list, title="Recent Views", description="Up to 10 latest views, newest first."
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "total_views": 42,
                "views_today": 3,
                "views_this_week": 17,
                "recent_views": [
                    {
                        "timestamp": "2026-10-19T08:30:00Z",
                        "camo_id": "abc123",
                        "user_agent": "github-camo (abc123)",
                    }
                ],
            }
        }
    )
