"""
“我为你挑的”随机内容（静态目录，与游戏状态无关）
"""

import random
from typing import Dict, Optional

PICKS = {
    "song": [
        "Perfect - Ed Sheeran",
        "All of Me - John Legend",
        "Can't Help Falling in Love - Elvis Presley",
        "Just the Way You Are - Bruno Mars",
        "Yellow - Coldplay",
    ],
    "message": [
        "You make ordinary days feel like an adventure.",
        "I still get butterflies when you text me.",
        "Thank you for being my favorite person.",
        "Every day with you is my new favorite day.",
    ],
    "question": [
        "What was your very first impression of me?",
        "Which memory of us do you replay the most?",
        "Where do you see us in five years?",
        "What small thing I do makes you happiest?",
    ],
    "dateIdea": [
        "Cook a new recipe together tonight.",
        "Stargazing with a blanket and hot chocolate.",
        "Recreate our first date.",
        "Build a blanket fort and watch a movie marathon.",
    ],
}


def random_pick(rng: Optional[random.Random] = None) -> Dict[str, str]:
    rng = rng or random
    pick_type = rng.choice(sorted(PICKS))
    return {"type": pick_type, "content": rng.choice(PICKS[pick_type])}
