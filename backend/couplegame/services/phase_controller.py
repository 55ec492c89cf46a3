"""
阶段/轮次控制

纯函数：根据当前(phase, round)和房间冻结的题目列表计算下一个状态。
服务端并不强制这些规则，客户端计算好目标状态后原样写入房间；
只有在开启 ENFORCE_TRANSITIONS 时才会用 TRANSITIONS 表做校验。
"""

from enum import Enum
from typing import Dict, FrozenSet, Iterable, List, NamedTuple, Optional


class Phase(str, Enum):
    LOBBY = "lobby"
    DASHBOARD = "dashboard"
    QUIZ = "quiz"
    THIS_THAT = "this_that"
    LIKELY = "likely"
    DARE = "dare"
    WOULD_YOU_RATHER = "would_you_rather"
    MOVIE_NIGHT = "movie_night"
    MUSIC_TOGETHER = "music_together"
    SUMMARY = "summary"


class PhaseState(NamedTuple):
    phase: str
    round: int


# 计分的活动：两人答案一致即为“匹配”
SCORED_PHASES = (Phase.QUIZ, Phase.THIS_THAT, Phase.LIKELY, Phase.WOULD_YOU_RATHER)

# 按冻结题目列表推进轮次的活动
ROUND_PHASES = SCORED_PHASES + (Phase.DARE,)

# 不消耗round的活动，共享状态存放在房间级单值槽位中
MEDIA_PHASES = (Phase.MOVIE_NIGHT, Phase.MUSIC_TOGETHER)

ACTIVITIES = ROUND_PHASES + MEDIA_PHASES

# 结束某个活动后跳转的阶段
FINISH_PHASE = {phase: Phase.SUMMARY for phase in SCORED_PHASES}
FINISH_PHASE[Phase.DARE] = Phase.DASHBOARD

FIRST_ROUND = 1
DEFAULT_PHASE = Phase.DASHBOARD.value
DEFAULT_ROUND = 0


def _activity_targets() -> FrozenSet[str]:
    return frozenset(p.value for p in ACTIVITIES)


# 严格模式下允许的迁移：当前阶段 -> 可以请求的阶段（同阶段推进轮次总是允许）
TRANSITIONS: Dict[str, FrozenSet[str]] = {
    Phase.LOBBY.value: frozenset({Phase.DASHBOARD.value}),
    Phase.DASHBOARD.value: _activity_targets() | {Phase.DASHBOARD.value},
    Phase.SUMMARY.value: frozenset({Phase.DASHBOARD.value}),
}
for _phase in SCORED_PHASES:
    TRANSITIONS[_phase.value] = frozenset({_phase.value, Phase.SUMMARY.value, Phase.DASHBOARD.value})
TRANSITIONS[Phase.DARE.value] = frozenset({Phase.DARE.value, Phase.DASHBOARD.value})
for _phase in MEDIA_PHASES:
    TRANSITIONS[_phase.value] = frozenset({_phase.value, Phase.DASHBOARD.value})


def _value(phase) -> str:
    return phase.value if isinstance(phase, Phase) else str(phase)


def is_known_phase(phase: str) -> bool:
    return _value(phase) in {p.value for p in Phase}


def is_legal_transition(current: str, requested: str) -> bool:
    """严格模式下的迁移校验"""
    allowed = TRANSITIONS.get(_value(current))
    if allowed is None:
        return False
    return _value(requested) in allowed


def start_game() -> PhaseState:
    """大厅 -> 主面板（两位玩家都到齐后由房主触发）"""
    return PhaseState(Phase.DASHBOARD.value, FIRST_ROUND)


def select_activity(activity: str) -> PhaseState:
    """从主面板进入某个活动，从第1轮开始"""
    if _value(activity) not in _activity_targets():
        raise ValueError(f"未知的活动: {activity}")
    return PhaseState(_value(activity), FIRST_ROUND)


def play_again() -> PhaseState:
    """总结页 -> 主面板"""
    return PhaseState(Phase.DASHBOARD.value, FIRST_ROUND)


def leave_activity() -> PhaseState:
    """活动中点击返回：只带phase，round使用接口默认值"""
    return PhaseState(DEFAULT_PHASE, DEFAULT_ROUND)


def advance(phase: str, round_number: int, question_ids: List[int]) -> PhaseState:
    """两人都回答完第round_number轮后的下一个状态

    最后一题之后：计分活动进入summary，dare回到dashboard。
    影音活动不消耗round，状态保持不变。
    """
    phase = _value(phase)
    if phase in {p.value for p in MEDIA_PHASES}:
        return PhaseState(phase, round_number)
    if phase not in {p.value for p in ROUND_PHASES}:
        raise ValueError(f"阶段 {phase} 没有轮次可以推进")

    if round_number >= len(question_ids):
        return PhaseState(FINISH_PHASE[Phase(phase)].value, FIRST_ROUND)
    return PhaseState(phase, round_number + 1)


def is_last_round(round_number: int, question_ids: List[int]) -> bool:
    return round_number >= len(question_ids)


def current_question_id(round_number: int, question_ids: List[int]) -> Optional[int]:
    """第round_number轮（从1开始）对应的题目ID，越界时返回None"""
    if 1 <= round_number <= len(question_ids):
        return question_ids[round_number - 1]
    return None


def host_player_id(player_ids: Iterable[int]) -> Optional[int]:
    """房主：房间里ID最小（最先加入）的玩家"""
    ids = list(player_ids)
    return min(ids) if ids else None


def both_answered(responses: Iterable, question_id: Optional[int], player_ids: Iterable[int]) -> bool:
    """两位玩家是否都已回答该题

    responses 可以是ORM对象、pydantic模型或带 player_id/question_id 键的字典。
    """
    if question_id is None:
        return False
    ids = list(player_ids)
    if len(ids) < 2:
        return False
    answered = {_field(r, "player_id") for r in responses if _field(r, "question_id") == question_id}
    return all(pid in answered for pid in ids[:2])


def can_advance(player_id: int, player_ids: Iterable[int], responses: Iterable, question_id: Optional[int]) -> bool:
    """界面约定：只有房主在两人都作答后才显示“下一题”按钮（服务端不校验）"""
    ids = sorted(player_ids)
    return player_id == host_player_id(ids) and both_answered(responses, question_id, ids)


def _field(obj, name: str):
    if isinstance(obj, dict):
        camel = "".join(part.capitalize() if i else part for i, part in enumerate(name.split("_")))
        return obj.get(name, obj.get(camel))
    return getattr(obj, name, None)
