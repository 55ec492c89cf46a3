"""
契合度计算

纯函数，输入为房间冻结的题目列表和房间全部回答，不落库。
"""

from collections import defaultdict
from typing import Dict, Iterable, List, Optional
from couplegame.core.utils import round_half_up
from couplegame.services.phase_controller import SCORED_PHASES


def _answers_by_question(responses: Iterable) -> Dict[int, List[str]]:
    grouped = defaultdict(list)
    for response in responses:
        if isinstance(response, dict):
            question_id = response.get("question_id", response.get("questionId"))
            answer = response.get("answer")
        else:
            question_id = response.question_id
            answer = response.answer
        grouped[question_id].append(answer)
    return grouped


def category_score(question_ids: List[int], responses: Iterable) -> Optional[int]:
    """单个类别的匹配百分比

    题目列表为空时返回None（不展示）；只统计恰好有两条回答的题目，
    答案字符串完全相同即为匹配。还没有任何题目凑齐两条回答时记为0。
    """
    if not question_ids:
        return None

    grouped = _answers_by_question(responses)
    matches = 0
    total = 0
    for question_id in question_ids:
        answers = grouped.get(question_id, [])
        if len(answers) == 2:
            total += 1
            if answers[0] == answers[1]:
                matches += 1

    return round_half_up(matches / total * 100) if total > 0 else 0


def overall_score(scores: Iterable[Optional[int]]) -> int:
    """各类别分数的平均值，没有数据的类别不参与平均"""
    available = [s for s in scores if s is not None]
    if not available:
        return 0
    return round_half_up(sum(available) / len(available))


def room_compatibility(room, responses: Iterable) -> Dict[str, Optional[int]]:
    """房间所有计分类别的分数"""
    responses = list(responses)
    return {
        phase.value: category_score(room.question_ids(phase.value), responses)
        for phase in SCORED_PHASES
    }


def vibe(overall: int) -> str:
    """总结页的评语"""
    if overall > 80:
        return "Soulmates?! 🔥"
    if overall > 50:
        return "Solid Connection! 🤞"
    return "Getting to know each other! 🌱"
