"""
Pydantic models for the season recap report and player profile.

Field names follow the camelCase JSON contract served to the frontend.
"""
from typing import Dict, List, Optional

from pydantic import BaseModel


# ============================================
# Intro (summary)
# ============================================

class FormatCount(BaseModel):
    count: int = 0
    percentage: int = 0


class DayCount(BaseModel):
    date: Optional[str] = None
    count: int = 0


class MonthCount(BaseModel):
    month: str
    gamesPlayed: int


class ActiveMonths(BaseModel):
    most: List[MonthCount] = []
    least: List[MonthCount] = []


class FavoriteFormat(BaseModel):
    format: Optional[str] = None
    gamesPlayed: int = 0
    winRate: int = 0


class Streak(BaseModel):
    startDate: Optional[str] = None
    endDate: Optional[str] = None
    days: int = 0
    gamesPlayed: int = 0


class Break(BaseModel):
    startDate: Optional[str] = None
    endDate: Optional[str] = None
    days: int = 0


class IntroSection(BaseModel):
    totalGames: int
    formatBreakdown: Dict[str, FormatCount]
    mostGamesInDay: DayCount
    activeMonths: ActiveMonths
    favoriteFormat: FavoriteFormat
    longestStreak: Streak
    longestBreak: Break


# ============================================
# Monthly distribution
# ============================================

class MonthGames(BaseModel):
    month: Optional[str] = None
    games: int = 0


class MonthDistribution(BaseModel):
    month: str
    rapid: int = 0
    blitz: int = 0
    bullet: int = 0
    total: int = 0


class MonthlyGamesSection(BaseModel):
    mostActive: MonthGames
    leastActive: MonthGames
    distribution: List[MonthDistribution]


# ============================================
# Ratings
# ============================================

class RatingPoint(BaseModel):
    date: str
    rating: int


class RatingGain(BaseModel):
    date: str
    gain: int


class RatingLoss(BaseModel):
    date: str
    loss: int


class BestRatingDay(BaseModel):
    date: Optional[str] = None
    format: Optional[str] = None
    gain: int = 0


class PeakRating(BaseModel):
    rating: int
    date: str


class RatingMetadata(BaseModel):
    firstGameDate: Optional[str] = None
    lastGameDate: Optional[str] = None
    totalGamesAnalyzed: int = 0


class RatingsSection(BaseModel):
    currentRatings: Dict[str, Optional[int]]
    ratingProgress: Dict[str, List[RatingPoint]]
    bestRatingGains: Dict[str, Optional[RatingGain]]
    worstRatingLosses: Dict[str, Optional[RatingLoss]]
    bestRatingDay: BestRatingDay
    peakRatings: Dict[str, Optional[PeakRating]]
    metadata: RatingMetadata


# ============================================
# Format specific
# ============================================

class OpeningStat(BaseModel):
    name: str
    count: int
    winRate: int


class FormatOpenings(BaseModel):
    asWhite: List[OpeningStat] = []
    asBlack: List[OpeningStat] = []


class DecisiveResults(BaseModel):
    total: int = 0
    byResignation: int = 0
    onTime: int = 0
    byCheckmate: int = 0


class DrawResults(BaseModel):
    total: int = 0
    byAgreement: int = 0
    byRepetition: int = 0
    byStalemate: int = 0
    byInsufficientMaterial: int = 0


class FormatResults(BaseModel):
    wins: DecisiveResults
    draws: DrawResults
    losses: DecisiveResults


class NotableGame(BaseModel):
    opponent: str
    opponentRating: int
    date: str
    url: str


class FormatStatsView(BaseModel):
    gamesPlayed: int
    winRate: int
    openings: FormatOpenings
    results: FormatResults
    averageGameDuration: float  # Estimated minutes


class FormatStats(FormatStatsView):
    ratingProgress: List[RatingPoint]
    bestWin: Optional[NotableGame] = None
    worstLoss: Optional[NotableGame] = None


# ============================================
# Playing patterns
# ============================================

class BucketStats(BaseModel):
    games: int = 0
    winRate: int = 0


class TimeOfDay(BaseModel):
    morning: BucketStats
    afternoon: BucketStats
    evening: BucketStats
    night: BucketStats
    bestTimeToPlay: str


class DayOfWeek(BaseModel):
    monday: BucketStats
    tuesday: BucketStats
    wednesday: BucketStats
    thursday: BucketStats
    friday: BucketStats
    saturday: BucketStats
    sunday: BucketStats
    bestDayToPlay: str


class LongestGame(BaseModel):
    opponent: Optional[str] = None
    date: Optional[str] = None
    format: Optional[str] = None
    result: Optional[str] = None
    duration: float = 0  # Estimated minutes
    url: Optional[str] = None


class PlayingPatternsSection(BaseModel):
    timeOfDay: TimeOfDay
    dayOfWeek: DayOfWeek
    averageGamesPerDay: float
    totalPlayingTime: float
    averageGameDuration: float
    longestGame: LongestGame


# ============================================
# Openings
# ============================================

class OpeningRank(BaseModel):
    name: str
    count: int
    winRate: int
    percentage: int


class ColorOpenings(BaseModel):
    topOpenings: List[OpeningRank]
    worstOpenings: List[OpeningRank]


class OpeningsByColor(BaseModel):
    asWhite: ColorOpenings
    asBlack: ColorOpenings


class OpeningsSection(BaseModel):
    byColor: OpeningsByColor


# ============================================
# Opponents
# ============================================

class OpponentRank(BaseModel):
    username: str
    games: int
    wins: int
    losses: int
    winRate: int
    lossRate: int
    percentage: int
    rating: Optional[int] = None
    format: Optional[str] = None
    minGames: int


class OpponentRankings(BaseModel):
    mostPlayed: List[OpponentRank]
    bestPerformance: List[OpponentRank]
    worstPerformance: List[OpponentRank]


class OpponentsSection(BaseModel):
    overall: OpponentRankings
    byFormat: Dict[str, OpponentRankings]


# ============================================
# Performance
# ============================================

class AccuracyStats(BaseModel):
    overall: Optional[float] = None
    byFormat: Dict[str, Optional[float]]


class PerformanceSection(BaseModel):
    accuracy: AccuracyStats


# ============================================
# Report
# ============================================

class ReportView(BaseModel):
    """Report without rating detail, safe to share where ratings are not exposed."""
    intro: IntroSection
    monthlyGames: MonthlyGamesSection
    formatSpecific: Dict[str, FormatStatsView]
    playingPatterns: PlayingPatternsSection
    openings: OpeningsSection
    opponents: OpponentsSection
    performance: PerformanceSection


class Report(BaseModel):
    intro: IntroSection
    monthlyGames: MonthlyGamesSection
    ratings: RatingsSection
    formatSpecific: Dict[str, FormatStats]
    playingPatterns: PlayingPatternsSection
    openings: OpeningsSection
    opponents: OpponentsSection
    performance: PerformanceSection


# ============================================
# Profile
# ============================================

class Country(BaseModel):
    name: Optional[str] = None
    code: Optional[str] = None


class UserProfile(BaseModel):
    username: str
    name: Optional[str] = None
    avatar: Optional[str] = None
    country: Country
    ratings: Dict[str, Optional[int]]
