"""
Scenario Generator for simulated campaign optimization results.

Produces the full result bundle shown on the dashboard: per-channel KPI
forecasts, strategy comparison curves, per-channel reach efficiency curves,
age demographics, overlap analysis, user activity and channel intersections.

The numbers are illustrative placeholders, not the output of a media-mix
optimizer. Budget shares and demographic fractions are not normalized to
100%. Randomness comes from a private ``random.Random`` so a fixed seed
reproduces a run exactly (apart from run id and timestamp).
"""

import logging
import math
import random
import uuid
from datetime import date, datetime, timedelta, timezone
from typing import Dict, List, Optional

from models.data_models import (
    CampaignInputs, ChannelConfig, ChannelData, ScenarioPoint, ChannelCurvePoint,
    AgeBucketData, OverlapPoint, ReachPoint, UserActivityData, OverlapIntersection,
    OptimizationResult
)
from data.catalog import AGE_BUCKETS

# Set up logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


STEP_COUNT = 10

# Strategy name -> (low, high) multiplier band on the linear reach target
STRATEGY_BANDS = {
    'Strategy A (Default)': (0.9, 1.0),
    'Strategy B (Max Reach)': (1.1, 1.2),
    'Strategy C (Cost Efficient)': (0.8, 0.85),
}

MAX_OVERLAP_FRACTION = 0.15
MAX_INTERSECTION_CHANNELS = 4


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves going up (4.5 -> 5)."""
    return math.floor(value + 0.5)


class ScenarioGenerator:
    """
    Builds an OptimizationResult from campaign inputs.

    Every public call draws fresh numbers from the generator's own random
    source; nothing is cached between runs.
    """

    def __init__(self, seed: Optional[int] = None, target_population: int = 5000000):
        """
        Initialize the generator.

        Args:
            seed: Seed for the random source; None gives a nondeterministic run
            target_population: Audience size used for percentages and intersections
        """
        self.rng = random.Random(seed)
        self.target_population = target_population

    def generate(self, inputs: CampaignInputs, summary: str = "",
                 today: Optional[date] = None) -> OptimizationResult:
        """
        Generate the complete result bundle for one run.

        Args:
            inputs: Campaign inputs; empty numeric fields count as zero
            summary: Executive summary text to attach
            today: Reference day for the user activity labels

        Returns:
            OptimizationResult with every series populated
        """
        budget = inputs.budget_value
        reach = inputs.reach_value
        run_id = str(uuid.uuid4())
        run_ts = self._format_run_timestamp(datetime.now(timezone.utc))

        logger.info(
            f"Generating scenarios for {len(inputs.channel_selection)} channels "
            f"(budget {budget}, target reach {reach})"
        )

        overlap_data = self.generate_overlap_series(budget, reach)

        return OptimizationResult(
            summary=summary,
            channels=self.generate_channels(inputs, run_id, run_ts),
            reach_over_time=[
                ReachPoint(iteration=point.step, reach=point.net_reach, budget=point.budget)
                for point in overlap_data
            ],
            candidate_comparison=self.generate_candidate_comparison(budget, reach),
            channel_curves=self.generate_channel_curves(inputs.channel_selection, budget),
            age_demographics=self.generate_age_demographics(budget, reach),
            overlap_data=overlap_data,
            user_activity=self.generate_user_activity(today),
            intersections=self.generate_intersections(inputs.channel_selection),
            total_projected_reach=round_half_up(reach * 1.05),
            users_lost_to_overlap=round_half_up(reach * 0.12),
            target_population=self.target_population
        )

    def generate_channels(self, inputs: CampaignInputs, run_id: str, run_ts: str) -> List[ChannelData]:
        """One KPI forecast row per selected channel, in selection order."""
        budget = inputs.budget_value
        reach = inputs.reach_value
        share = 100 / max(1, len(inputs.channel_selection))

        channels = []
        for name in inputs.channel_selection:
            config = inputs.channel_settings.get(name) or ChannelConfig()
            media_budget = config.fixed_budget or round_half_up(budget * (share / 100))
            digital_reach = round_half_up(reach * self.rng.uniform(0.2, 0.6))

            channels.append(ChannelData(
                run_id=run_id,
                customer_name=inputs.customer_name,
                campaign_name=inputs.campaign_name,
                goal_type=inputs.goal_type,
                run_ts=run_ts,
                channel=name,
                media_budget=media_budget,
                budget_share_pct=share,
                cpm=config.cpm or self.rng.uniform(5, 10),
                tv_factor=config.tv_factor or 0,
                tv_reach_num=0,
                tv_reach_pct=0.0,
                digital_impressions=media_budget * 100,
                digital_reach_num=digital_reach,
                digital_reach_pct=self._percent_of_population(digital_reach),
                contact_freq=self.rng.uniform(2.5, 3.5),
                budget=media_budget,
                reach=digital_reach,
                roi=self.rng.uniform(2, 5)
            ))

        return channels

    def generate_candidate_comparison(self, budget: float, reach: float) -> List[ScenarioPoint]:
        """Reach per budget step for each named strategy."""
        points = []
        for step in range(1, STEP_COUNT + 1):
            linear_reach = reach * step / STEP_COUNT
            strategies = {
                name: round_half_up(linear_reach * self.rng.uniform(low, high))
                for name, (low, high) in STRATEGY_BANDS.items()
            }
            points.append(ScenarioPoint(
                step=step,
                budget=self._step_budget(budget, step),
                strategies=strategies
            ))
        return points

    def generate_channel_curves(self, channels: List[str], budget: float) -> Dict[str, List[ChannelCurvePoint]]:
        """
        Diminishing-returns reach curve per channel.

        The efficiency is drawn once per channel, so each curve is monotonic
        in budget.
        """
        curves = {}
        for channel in channels:
            efficiency = self.rng.uniform(0.5, 1.5)
            curves[channel] = [
                ChannelCurvePoint(
                    budget=self._step_budget(budget, step),
                    reach=round_half_up(efficiency * 100000 * math.log(self._step_budget(budget, step) / 100 + 1))
                )
                for step in range(1, STEP_COUNT + 1)
            ]
        return curves

    def generate_age_demographics(self, budget: float, reach: float) -> List[AgeBucketData]:
        """Independent reach, budget and audience fractions for the fixed age buckets."""
        return [
            AgeBucketData(
                bucket=bucket,
                reach=round_half_up(reach * self.rng.uniform(0.05, 0.15)),
                budget=round_half_up(budget * self.rng.uniform(0.05, 0.15)),
                total_users=round_half_up(self.target_population * self.rng.uniform(0.08, 0.12))
            )
            for bucket in AGE_BUCKETS
        ]

    def generate_overlap_series(self, budget: float, reach: float) -> List[OverlapPoint]:
        """Gross vs net reach; the overlap share grows linearly up to 15% at the last step."""
        points = []
        for step in range(1, STEP_COUNT + 1):
            gross = round_half_up(reach * step / STEP_COUNT)
            overlap = round_half_up(gross * MAX_OVERLAP_FRACTION * step / STEP_COUNT)
            points.append(OverlapPoint(
                step=step,
                budget=self._step_budget(budget, step),
                gross_reach=gross,
                net_reach=gross - overlap,
                overlap=overlap
            ))
        return points

    def generate_user_activity(self, today: Optional[date] = None) -> List[UserActivityData]:
        """Daily and monthly active users for the last seven days, oldest first."""
        today = today or date.today()
        activity = []
        for days_back in range(6, -1, -1):
            day = today - timedelta(days=days_back)
            activity.append(UserActivityData(
                label=day.strftime('%a'),
                dau=round_half_up(self.target_population * 0.15 * self.rng.uniform(0.8, 1.2)),
                mau=round_half_up(self.target_population * 0.45 * self.rng.uniform(0.9, 1.1))
            ))
        return activity

    def generate_intersections(self, channels: List[str]) -> List[OverlapIntersection]:
        """Singleton rows for up to four channels plus fixed pair and triple overlaps."""
        active = channels[:MAX_INTERSECTION_CHANNELS]
        population = self.target_population

        intersections = [
            OverlapIntersection(channels=[channel], overlap_pct=100, size=round_half_up(population * 0.1))
            for channel in active
        ]

        if len(active) >= 2:
            intersections.append(OverlapIntersection(
                channels=[active[0], active[1]], overlap_pct=22, size=round_half_up(population * 0.04)
            ))
        if len(active) >= 3:
            intersections.append(OverlapIntersection(
                channels=[active[0], active[2]], overlap_pct=15, size=round_half_up(population * 0.02)
            ))
            intersections.append(OverlapIntersection(
                channels=[active[0], active[1], active[2]], overlap_pct=8, size=round_half_up(population * 0.01)
            ))

        return intersections

    def _step_budget(self, budget: float, step: int) -> float:
        return (budget / STEP_COUNT) * step

    def _percent_of_population(self, value: float) -> float:
        if self.target_population <= 0:
            return 0.0
        return (value / self.target_population) * 100

    @staticmethod
    def _format_run_timestamp(moment: datetime) -> str:
        # Millisecond precision, e.g. "2026-01-31 09:15:02.123 UTC"
        return moment.strftime('%Y-%m-%d %H:%M:%S.') + f"{moment.microsecond // 1000:03d} UTC"
