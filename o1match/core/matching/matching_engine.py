"""
Talent-Job matching engine.

Scores a talent profile against a job's requirements using five weighted
factors (O-1 score threshold, O-1 criteria overlap, skills, education and
experience) and ranks jobs for a talent or talents for a job.

The engine does no I/O and an instance holds only its immutable weights.
"""

import math
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Final, Optional

from o1match.data.models import (
    CriterionMatch,
    EducationMatch,
    ExperienceMatch,
    FactorScore,
    JobMatchProfile,
    MatchDetails,
    MatchingWeights,
    MatchResult,
    ScoreRequirementMatch,
    SkillMatch,
    TalentMatchProfile,
)
from o1match.utils.constants import (
    DEFICIENCY_THRESHOLD,
    EDUCATION_GAP_PENALTY,
    EXTRA_CRITERIA_BONUS_CAP,
    EXTRA_CRITERION_BONUS,
    MAX_LISTED_MISSING_SKILLS,
    PREFERRED_SKILLS_POINTS,
    REQUIRED_SKILLS_POINTS,
    SCORE_AT_THRESHOLD,
    SCORE_BELOW_THRESHOLD_CEILING,
    SCORE_EXCESS_BONUS,
    STRENGTH_THRESHOLD,
    EducationLevel,
    MatchCategory,
    MatchFactor,
)
from o1match.utils.logger import get_logger

from .skills import find_matching_skill

logger = get_logger(__name__)

FULL_MARKS: Final[float] = 100.0

_FACTOR_ORDER: Final[tuple[MatchFactor, ...]] = tuple(MatchFactor)

_CATEGORY_HEADLINES: Final[dict[MatchCategory, str]] = {
    MatchCategory.EXCELLENT: "Excellent match.",
    MatchCategory.STRONG: "Strong match.",
    MatchCategory.MODERATE: "Moderate match.",
    MatchCategory.WEAK: "Weak match.",
    MatchCategory.POOR: "Limited match.",
}

_STRENGTH_PHRASES: Final[dict[MatchFactor, str]] = {
    MatchFactor.O1_SCORE: "meets the O-1 score requirement",
    MatchFactor.CRITERIA: "covers the preferred O-1 criteria",
    MatchFactor.SKILLS: "strong skills match",
    MatchFactor.EDUCATION: "meets the education requirement",
    MatchFactor.EXPERIENCE: "meets the experience requirement",
}


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positives."""
    return int(math.floor(value + 0.5))


def _clamp(value: float, low: float = 0.0, high: float = FULL_MARKS) -> float:
    return max(low, min(high, value))


@dataclass(frozen=True)
class JobMatch:
    """A job paired with its match result for a given talent."""

    job: JobMatchProfile
    match: MatchResult


@dataclass(frozen=True)
class TalentMatch:
    """A talent paired with its match result for a given job."""

    talent: TalentMatchProfile
    match: MatchResult


class MatchingEngine:
    """
    Engine for scoring talent against job requirements.

    Uses a multi-factor approach, each factor scored 0-100:
    - O-1 score against the job's minimum
    - Overlap with the job's preferred O-1 criteria
    - Skills matching (required vs preferred)
    - Education level
    - Years of experience

    A factor the job sets no requirement for scores full marks.
    """

    def __init__(self, weights: Optional[MatchingWeights] = None):
        """
        Initialize the matching engine.

        Args:
            weights: Optional custom factor weights (defaults from constants)
        """
        self.weights = weights or MatchingWeights.from_defaults()

    def calculate_match_score(
        self,
        talent: TalentMatchProfile,
        job: JobMatchProfile,
    ) -> MatchResult:
        """
        Match a talent profile against a job's requirements.

        Args:
            talent: Normalized talent profile
            job: Normalized job profile

        Returns:
            MatchResult with overall score, category, summary and breakdown
        """
        o1_points, score_requirement = self._score_o1(talent, job)
        criteria_points, criteria_rows = self._score_criteria(talent, job)
        skills_points, skill_rows = self._score_skills(talent, job)
        education_points, education_match = self._score_education(talent, job)
        experience_points, experience_match = self._score_experience(talent, job)

        points = {
            MatchFactor.O1_SCORE: o1_points,
            MatchFactor.CRITERIA: criteria_points,
            MatchFactor.SKILLS: skills_points,
            MatchFactor.EDUCATION: education_points,
            MatchFactor.EXPERIENCE: experience_points,
        }
        breakdown = self._calculate_breakdown(points)

        total = sum(points[factor] * self.weights.for_factor(factor) for factor in _FACTOR_ORDER)
        overall_score = round_half_up(_clamp(total))
        category = MatchCategory.from_score(overall_score)

        details = MatchDetails(
            score_requirement=score_requirement,
            criteria_match=criteria_rows,
            skills_match=skill_rows,
            education_match=education_match,
            experience_match=experience_match,
        )
        summary = self._generate_summary(category, points, details, job)

        logger.debug(
            f"Scored talent {talent.id or '?'} for job {job.id or '?'}: "
            f"{overall_score} ({category.value})"
        )

        return MatchResult(
            overall_score=overall_score,
            category=category,
            summary=summary,
            breakdown=breakdown,
            details=details,
        )

    # -------------------------------------------------------------------------
    # Factors
    # -------------------------------------------------------------------------

    def _score_o1(
        self,
        talent: TalentMatchProfile,
        job: JobMatchProfile,
    ) -> tuple[float, ScoreRequirementMatch]:
        """Score the talent's O-1 score against the job's minimum."""
        required = job.min_score
        has = talent.o1_score
        match = ScoreRequirementMatch(required=required, has=has, met=has >= required)

        if required == 0:
            return FULL_MARKS, match

        if match.met:
            # Meets the threshold, small bonus for exceeding it
            return min(FULL_MARKS, SCORE_AT_THRESHOLD + (has - required) * SCORE_EXCESS_BONUS), match

        # Below threshold, proportional to how close it gets
        return float(round_half_up(SCORE_BELOW_THRESHOLD_CEILING * has / required)), match

    def _score_criteria(
        self,
        talent: TalentMatchProfile,
        job: JobMatchProfile,
    ) -> tuple[float, list[CriterionMatch]]:
        """Score overlap between criteria met and the job's preferred criteria."""
        preferred = job.preferred_criteria
        met = talent.criteria_met

        rows = [
            CriterionMatch(criterion=criterion, preferred=True, has=criterion in met)
            for criterion in sorted(preferred)
        ]
        extras = sorted(met - preferred)
        rows.extend(CriterionMatch(criterion=c, preferred=False, has=True) for c in extras)

        if not preferred:
            return FULL_MARKS, rows

        matched = len(preferred & met)
        base = FULL_MARKS * matched / len(preferred)
        bonus = min(len(extras) * EXTRA_CRITERION_BONUS, EXTRA_CRITERIA_BONUS_CAP)
        return min(FULL_MARKS, base + bonus), rows

    def _score_skills(
        self,
        talent: TalentMatchProfile,
        job: JobMatchProfile,
    ) -> tuple[float, list[SkillMatch]]:
        """
        Score required and preferred skill coverage.

        Required skills are worth 60 points and preferred skills 40. A list
        the job leaves empty counts as fully covered.
        """
        required_rows = [
            self._skill_row(skill, True, talent.skills) for skill in sorted(job.required_skills)
        ]
        preferred_rows = [
            self._skill_row(skill, False, talent.skills) for skill in sorted(job.preferred_skills)
        ]

        score = (
            REQUIRED_SKILLS_POINTS * self._coverage(required_rows)
            + PREFERRED_SKILLS_POINTS * self._coverage(preferred_rows)
        )
        return _clamp(score), required_rows + preferred_rows

    @staticmethod
    def _skill_row(skill: str, required: bool, talent_skills: frozenset[str]) -> SkillMatch:
        matched_by = find_matching_skill(skill, talent_skills)
        return SkillMatch(
            skill=skill,
            required=required,
            has=matched_by is not None,
            matched_by=matched_by,
        )

    @staticmethod
    def _coverage(rows: list[SkillMatch]) -> float:
        """Fraction of rows satisfied; an empty list is fully covered."""
        if not rows:
            return 1.0
        return sum(1 for row in rows if row.has) / len(rows)

    def _score_education(
        self,
        talent: TalentMatchProfile,
        job: JobMatchProfile,
    ) -> tuple[float, EducationMatch]:
        """Score education level against the job's minimum level."""
        required = job.required_education
        has = talent.education_level
        match = EducationMatch(
            required=None if required is EducationLevel.NONE else required.value,
            has=None if has is EducationLevel.NONE else has.value,
            met=has.rank >= required.rank,
        )

        if match.met:
            return FULL_MARKS, match

        gap = required.rank - has.rank
        return _clamp(FULL_MARKS - gap * EDUCATION_GAP_PENALTY), match

    def _score_experience(
        self,
        talent: TalentMatchProfile,
        job: JobMatchProfile,
    ) -> tuple[float, ExperienceMatch]:
        """Score years of experience against the job's minimum."""
        required = job.min_experience
        has = talent.years_experience
        match = ExperienceMatch(required=required or None, has=has, met=has >= required)

        if match.met:
            return FULL_MARKS, match

        return _clamp(FULL_MARKS * has / required), match

    # -------------------------------------------------------------------------
    # Combination
    # -------------------------------------------------------------------------

    def _calculate_breakdown(self, points: dict[MatchFactor, float]) -> dict[str, FactorScore]:
        """Calculate the weighted breakdown per factor."""
        return {
            factor.value: FactorScore(
                score=round(points[factor], 2),
                weight=self.weights.for_factor(factor),
            )
            for factor in _FACTOR_ORDER
        }

    @staticmethod
    def _has_requirement(factor: MatchFactor, job: JobMatchProfile) -> bool:
        """Whether the job sets any requirement for a factor."""
        if factor is MatchFactor.O1_SCORE:
            return job.min_score > 0
        if factor is MatchFactor.CRITERIA:
            return bool(job.preferred_criteria)
        if factor is MatchFactor.SKILLS:
            return job.has_skill_requirements
        if factor is MatchFactor.EDUCATION:
            return job.required_education is not EducationLevel.NONE
        return job.min_experience > 0

    def _generate_summary(
        self,
        category: MatchCategory,
        points: dict[MatchFactor, float],
        details: MatchDetails,
        job: JobMatchProfile,
    ) -> str:
        """Generate a short human-readable explanation of the match."""
        parts = [_CATEGORY_HEADLINES[category]]

        active = [
            factor for factor in _FACTOR_ORDER
            if self._has_requirement(factor, job) and self.weights.for_factor(factor) > 0
        ]
        if not active:
            parts.append("The job sets no specific requirements.")
            return " ".join(parts)

        # Up to two strengths, largest weighted contribution first
        strengths = sorted(
            (f for f in active if points[f] >= STRENGTH_THRESHOLD),
            key=lambda f: (-points[f] * self.weights.for_factor(f), _FACTOR_ORDER.index(f)),
        )[:2]
        if strengths:
            sentence = "; ".join(_STRENGTH_PHRASES[f] for f in strengths)
            parts.append(sentence[0].upper() + sentence[1:] + ".")

        requirement = details.score_requirement
        if MatchFactor.O1_SCORE in active and not requirement.met:
            parts.append(
                f"O-1 score ({requirement.has}) is below the required {requirement.required}."
            )

        # Weakest remaining factor, if notably deficient
        candidates = [
            f for f in active
            if f is not MatchFactor.O1_SCORE and points[f] < DEFICIENCY_THRESHOLD
        ]
        if candidates:
            weakest = min(
                candidates,
                key=lambda f: (points[f], -self.weights.for_factor(f), _FACTOR_ORDER.index(f)),
            )
            parts.append(self._deficiency_sentence(weakest, details))

        return " ".join(parts)

    @staticmethod
    def _deficiency_sentence(factor: MatchFactor, details: MatchDetails) -> str:
        if factor is MatchFactor.SKILLS:
            missing = details.missing_required_skills
            if 0 < len(missing) <= MAX_LISTED_MISSING_SKILLS:
                return f"Missing required skills: {', '.join(missing)}."
            if missing:
                return f"Missing {len(missing)} required skills."
            return "Few of the preferred skills are present."

        if factor is MatchFactor.CRITERIA:
            missing = details.missing_preferred_criteria
            preferred = sum(1 for row in details.criteria_match if row.preferred)
            return f"Missing {len(missing)} of {preferred} preferred O-1 criteria."

        if factor is MatchFactor.EDUCATION:
            edu = details.education_match
            return f"Education ({edu.has or 'none'}) is below the required {edu.required}."

        exp = details.experience_match
        return f"Has {exp.has} of the {exp.required} required years of experience."

    # -------------------------------------------------------------------------
    # Ranking
    # -------------------------------------------------------------------------

    def get_best_job_matches(
        self,
        talent: TalentMatchProfile,
        jobs: Iterable[JobMatchProfile],
        limit: int = 10,
    ) -> list[JobMatch]:
        """
        Rank jobs for a talent.

        Args:
            talent: The talent to match
            jobs: Candidate jobs
            limit: Maximum number of results

        Returns:
            Up to ``limit`` matches, highest score first. Ties keep input order.
        """
        if limit <= 0:
            return []
        matches = [JobMatch(job=job, match=self.calculate_match_score(talent, job)) for job in jobs]
        ranked = self._rank(matches)[:limit]
        logger.debug(f"Ranked {len(matches)} jobs for talent {talent.id or '?'}, returning {len(ranked)}")
        return ranked

    def get_best_talent_matches(
        self,
        job: JobMatchProfile,
        talents: Iterable[TalentMatchProfile],
        limit: int = 10,
    ) -> list[TalentMatch]:
        """
        Rank talents for a job.

        Args:
            job: The job to match against
            talents: Candidate talents
            limit: Maximum number of results

        Returns:
            Up to ``limit`` matches, highest score first. Ties keep input order.
        """
        if limit <= 0:
            return []
        matches = [
            TalentMatch(talent=talent, match=self.calculate_match_score(talent, job))
            for talent in talents
        ]
        ranked = self._rank(matches)[:limit]
        logger.debug(f"Ranked {len(matches)} talents for job {job.id or '?'}, returning {len(ranked)}")
        return ranked

    @staticmethod
    def _rank(matches: list) -> list:
        # sorted() is stable, also with reverse=True
        return sorted(matches, key=lambda m: m.match.overall_score, reverse=True)


# Singleton instance
_matching_engine: Optional[MatchingEngine] = None


def get_matching_engine() -> MatchingEngine:
    """Get the matching engine singleton, weighted from settings."""
    global _matching_engine
    if _matching_engine is None:
        from o1match.utils.config import get_settings

        _matching_engine = MatchingEngine(get_settings().matching.to_weights())
    return _matching_engine


def reset_matching_engine() -> None:
    """Drop the singleton so the next call rebuilds it from settings."""
    global _matching_engine
    _matching_engine = None


def calculate_match_score(talent: TalentMatchProfile, job: JobMatchProfile) -> MatchResult:
    """Score a talent against a job with the shared engine."""
    return get_matching_engine().calculate_match_score(talent, job)


def get_best_job_matches(
    talent: TalentMatchProfile,
    jobs: Iterable[JobMatchProfile],
    limit: int = 10,
) -> list[JobMatch]:
    """Rank jobs for a talent with the shared engine."""
    return get_matching_engine().get_best_job_matches(talent, jobs, limit)


def get_best_talent_matches(
    job: JobMatchProfile,
    talents: Iterable[TalentMatchProfile],
    limit: int = 10,
) -> list[TalentMatch]:
    """Rank talents for a job with the shared engine."""
    return get_matching_engine().get_best_talent_matches(job, talents, limit)
