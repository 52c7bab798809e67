"""
progression.py: Turns run outcomes into XP, levels and ranks.
"""

import logging
from typing import Optional, Sequence, Tuple

from .constants import MILESTONE_REWARDS, XP_PER_MINUTE_PLAYED, XP_PER_PIPE_CROSSED
from .data_models import MilestoneAward, PlayerProfile, ProfileSummary, RunReport, RunState
from .leveling import LevelingTable, RankTable
from .profile_db import ProfileStore

logger = logging.getLogger(__name__)


class ProgressionEngine:
    """
    Credits milestone XP as pipes are passed and run XP when a run ends,
    then walks the profile up the level curve.
    Every credit is saved through the store straight away.
    """

    def __init__(self, store: ProfileStore, leveling: Optional[LevelingTable] = None,
                 ranks: Optional[RankTable] = None,
                 milestones: Sequence[Tuple[int, int]] = MILESTONE_REWARDS,
                 xp_per_minute: float = XP_PER_MINUTE_PLAYED,
                 xp_per_pipe: float = XP_PER_PIPE_CROSSED):
        if xp_per_minute < 0 or xp_per_pipe < 0:
            raise ValueError("XP rates must not be negative")

        self.store = store
        self.leveling = leveling or LevelingTable()
        self.ranks = ranks or RankTable()
        self.milestones = sorted(milestones, reverse=True)
        self.xp_per_minute = xp_per_minute
        self.xp_per_pipe = xp_per_pipe

    # -------- During a run --------

    def award_milestone(self, run: RunState, profile: PlayerProfile) -> Optional[MilestoneAward]:
        """Pays the milestone matching the current pipe count, once per run."""
        for threshold, xp in self.milestones:
            if run.pipes_passed == threshold and threshold not in run.milestones_awarded:
                run.milestones_awarded.add(threshold)
                run.milestone_xp += xp
                profile.total_xp += xp
                self.store.save_profile(profile)

                award = MilestoneAward(threshold=threshold, xp=xp)
                logger.info("Milestone %d pipes reached: %s", threshold, award.message)
                return award
        return None

    # -------- At run end --------

    def time_xp(self, elapsed_seconds: int) -> int:
        minutes = max(elapsed_seconds, 0) // 60
        return int(minutes * self.xp_per_minute)

    def pipe_xp(self, pipes_crossed: int) -> int:
        return int(max(pipes_crossed, 0) * self.xp_per_pipe)

    def end_run(self, profile: PlayerProfile, score: int, elapsed_seconds: int,
                pipes_crossed: int, run: Optional[RunState] = None) -> RunReport:
        """Credits run XP, updates lifetime totals, levels up and saves."""
        time_xp = self.time_xp(elapsed_seconds)
        pipe_xp = self.pipe_xp(pipes_crossed)

        profile.total_xp += time_xp + pipe_xp
        profile.total_playtime_seconds += max(elapsed_seconds, 0)
        profile.total_pipes_crossed += max(pipes_crossed, 0)
        profile.highest_pipes_in_run = max(profile.highest_pipes_in_run, pipes_crossed)

        start_level = profile.current_level
        new_ranks = self.apply_level_ups(profile)

        self.store.save_profile(profile)

        report = RunReport(
            score=score,
            elapsed_seconds=elapsed_seconds,
            pipes_crossed=pipes_crossed,
            time_xp=time_xp,
            pipe_xp=pipe_xp,
            milestone_xp=run.milestone_xp if run else 0,
            milestones=sorted(run.milestones_awarded) if run else [],
            level_up=profile.current_level > start_level,
            new_level=profile.current_level,
            new_ranks=new_ranks,
        )
        logger.info(
            "Run over: score=%d time=%ds xp=+%d (time %d, pipes %d, milestones %d) level=%d",
            score, elapsed_seconds, report.total_xp, time_xp, pipe_xp,
            report.milestone_xp, profile.current_level)
        return report

    def apply_level_ups(self, profile: PlayerProfile) -> list:
        """Raises the level while XP allows. Returns ranks unlocked on the way up."""
        new_ranks = []
        cap = self.leveling.level_cap
        while (profile.current_level < cap
               and profile.total_xp >= self.leveling.cumulative_xp(profile.current_level + 1)):
            profile.current_level += 1
            logger.info("Level up! %s reached level %d", profile.name, profile.current_level)

            rank = self.ranks.rank_for(profile.current_level)
            if rank not in profile.achieved_ranks:
                profile.achieved_ranks.add(rank)
                new_ranks.append(rank)
                logger.info("Rank unlocked: %s", rank)
        return new_ranks

    def reconcile_level(self, profile: PlayerProfile):
        """
        Makes a loaded profile's level agree with its XP: a level above what the XP
        reaches is lowered, a lagging one is raised, and every rank up to it is held.
        """
        reachable = self.leveling.level_for_xp(profile.total_xp)
        if profile.current_level > reachable:
            logger.warning("Saved level %d exceeds what %d XP reaches, using level %d.",
                           profile.current_level, profile.total_xp, reachable)
            profile.current_level = reachable
        self.apply_level_ups(profile)

        for threshold, name in self.ranks.ranks():
            if threshold <= profile.current_level:
                profile.achieved_ranks.add(name)

    # -------- Display --------

    def describe_profile(self, profile: PlayerProfile) -> ProfileSummary:
        xp_in_level, xp_for_next = self.leveling.progress(profile.total_xp, profile.current_level)
        return ProfileSummary(
            name=profile.name,
            level=profile.current_level,
            rank=self.ranks.rank_for(profile.current_level),
            total_xp=profile.total_xp,
            xp_in_level=xp_in_level,
            xp_for_next_level=xp_for_next,
            total_playtime_seconds=profile.total_playtime_seconds,
            total_pipes_crossed=profile.total_pipes_crossed,
            highest_pipes_in_run=profile.highest_pipes_in_run,
            ranks=[
                (name, threshold, name in profile.achieved_ranks)
                for threshold, name in self.ranks.ranks()
            ],
        )
