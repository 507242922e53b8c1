"""
Core data models for the Advantiv campaign planner.
"""

import math
from dataclasses import dataclass, field
from datetime import date, timedelta
from enum import Enum
from typing import Dict, List, Optional


class RunStatus(Enum):
    """Stages of an optimization run."""
    IDLE = "IDLE"
    ANALYZING = "ANALYZING"
    OPTIMIZING = "OPTIMIZING"
    SIMULATING = "SIMULATING"
    FINALIZING = "FINALIZING"
    COMPLETED = "COMPLETED"


@dataclass
class ChannelConfig:
    """Per-channel constraints entered next to the channel selection."""
    always_include: bool = False
    frequency_capping: bool = False
    fixed_budget: Optional[float] = None
    cpm: Optional[float] = None
    tv_factor: Optional[float] = None
    scale_factor: Optional[float] = None


def calculate_duration_weeks(start_date: date, end_date: date) -> int:
    """
    Convert a campaign date range into whole weeks.

    The day span is clamped to at least one day and the week count to at
    least one week, so reversed or same-day ranges still give 1.
    """
    diff_days = max(1, math.ceil((end_date - start_date).total_seconds() / 86400))
    return max(1, diff_days // 7)


@dataclass
class CampaignInputs:
    """Campaign parameters collected from the input form."""
    total_budget: Optional[float] = None
    goal_type: str = "Budget"
    campaign_start_date: date = field(default_factory=date.today)
    campaign_end_date: date = field(default_factory=lambda: date.today() + timedelta(days=7))
    campaign_duration: int = 1
    country: str = "NL"
    age_min: Optional[int] = None
    age_max: Optional[int] = None
    minimal_contact_frequency: int = 1
    channel_selection: List[str] = field(default_factory=list)
    channel_settings: Dict[str, ChannelConfig] = field(default_factory=dict)
    max_channels: int = 2
    target_reach: Optional[float] = None
    gender: str = "All"
    customer_name: str = ""
    campaign_name: str = ""

    @classmethod
    def defaults(cls, today: Optional[date] = None) -> "CampaignInputs":
        """Fresh inputs for a new session or after a reset."""
        today = today or date.today()
        return cls(
            campaign_start_date=today,
            campaign_end_date=today + timedelta(days=7),
            campaign_duration=1
        )

    @property
    def budget_value(self) -> float:
        """Total budget with an empty field treated as zero."""
        return self.total_budget if self.total_budget is not None else 0

    @property
    def reach_value(self) -> float:
        """Target reach with an empty field treated as zero."""
        return self.target_reach if self.target_reach is not None else 0

    def set_dates(self, start_date: date, end_date: date):
        """Update the date range and recompute the duration in weeks."""
        self.campaign_start_date = start_date
        self.campaign_end_date = end_date
        self.campaign_duration = calculate_duration_weeks(start_date, end_date)


@dataclass
class ChannelData:
    """KPI forecast row for one selected channel in one run."""
    run_id: str
    customer_name: str
    campaign_name: str
    goal_type: str
    run_ts: str
    channel: str
    media_budget: float
    budget_share_pct: float
    cpm: float
    tv_factor: float
    tv_reach_num: int
    tv_reach_pct: float
    digital_impressions: float
    digital_reach_num: int
    digital_reach_pct: float
    contact_freq: float
    budget: float
    reach: int
    roi: float


@dataclass
class ScenarioPoint:
    """One budget step of the strategy comparison."""
    step: int
    budget: float
    strategies: Dict[str, int]


@dataclass
class ChannelCurvePoint:
    """Reach achieved by one channel at one budget level."""
    budget: float
    reach: int


@dataclass
class AgeBucketData:
    """Reach, budget and audience size for one age bucket."""
    bucket: str
    reach: int
    budget: int
    total_users: int


@dataclass
class OverlapPoint:
    """Gross and net reach at one budget step."""
    step: int
    budget: float
    gross_reach: int
    net_reach: int
    overlap: int


@dataclass
class ReachPoint:
    """Net reach per optimization iteration."""
    iteration: int
    reach: int
    budget: float


@dataclass
class UserActivityData:
    """Daily and monthly active users for one day."""
    label: str
    dau: int
    mau: int


@dataclass
class OverlapIntersection:
    """Audience shared by a set of channels."""
    channels: List[str]
    overlap_pct: float
    size: int


@dataclass
class OptimizationResult:
    """Complete output of one optimization run."""
    summary: str
    channels: List[ChannelData]
    reach_over_time: List[ReachPoint]
    candidate_comparison: List[ScenarioPoint]
    channel_curves: Dict[str, List[ChannelCurvePoint]]
    age_demographics: List[AgeBucketData]
    overlap_data: List[OverlapPoint]
    user_activity: List[UserActivityData]
    intersections: List[OverlapIntersection]
    total_projected_reach: int
    users_lost_to_overlap: int
    target_population: int

    @property
    def total_media_budget(self) -> float:
        """Sum of media budgets across channels."""
        return sum(channel.media_budget for channel in self.channels)
