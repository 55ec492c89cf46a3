"""
题库服务
"""

import logging
from typing import Iterable, List, Mapping
from sqlalchemy.orm import Session
from couplegame.models.question import Question

logger = logging.getLogger(__name__)

# 启动时写入的题目（按题干去重，重复启动不会产生重复题目）
SEED_QUESTIONS = [
    # Quiz
    {"category": "quiz", "text": "What is my ideal dream vacation?", "options": ["Beach resort", "Mountain cabin", "City exploration", "Staycation"]},
    {"category": "quiz", "text": "What food could I eat every day?", "options": ["Pizza", "Sushi", "Tacos", "Pasta"]},
    {"category": "quiz", "text": "What's my biggest pet peeve?", "options": ["Loud chewing", "Being late", "Slow internet", "Messy rooms"]},
    {"category": "quiz", "text": "Free time?", "options": ["Music", "Movies", "Reading", "Scrolling"]},
    {"category": "quiz", "text": "Weekend plan?", "options": ["Sleep", "Outing", "Netflix", "Family"]},
    {"category": "quiz", "text": "Travel mood?", "options": ["Mountains", "Beach", "City", "Home"]},
    {"category": "quiz", "text": "Fun activity?", "options": ["Cooking", "Gaming", "Dancing", "Talking"]},
    {"category": "quiz", "text": "Creative side?", "options": ["Art", "Writing", "Singing", "None"]},
    {"category": "quiz", "text": "Sports vibe?", "options": ["Playing", "Watching", "Both", "None"]},
    {"category": "quiz", "text": "Favorite snack?", "options": ["Chips", "Chocolate", "Cookies", "Fruit"]},
    {"category": "quiz", "text": "Comfort food?", "options": ["Pizza", "Momos", "Burger", "Pasta"]},
    {"category": "quiz", "text": "Sweet craving?", "options": ["Cake", "Ice-cream", "Gulabjamun", "Chocolate"]},
    {"category": "quiz", "text": "Drink choice?", "options": ["Tea", "Coffee", "Juice", "Shake"]},
    {"category": "quiz", "text": "Street food love?", "options": ["Pani-puri", "Chaat", "Momos", "Fries"]},
    {"category": "quiz", "text": "Late-night hunger?", "options": ["Maggi", "Snacks", "Sweets", "Nothing"]},
    {"category": "quiz", "text": "Music mood?", "options": ["Romantic", "Sad", "Chill", "Energetic"]},
    {"category": "quiz", "text": "Movie choice?", "options": ["Rom-com", "Action", "Drama", "Thriller"]},
    {"category": "quiz", "text": "Series type?", "options": ["Sitcom", "Anime", "K-drama", "Reality"]},
    {"category": "quiz", "text": "Background sound?", "options": ["Music", "Silence", "TV", "Nature"]},

    # This or That
    {"category": "this_that", "text": "Morning person or Night owl?", "options": ["Morning", "Night"]},
    {"category": "this_that", "text": "Coffee or Tea?", "options": ["Coffee", "Tea"]},
    {"category": "this_that", "text": "Movie night or Clubbing?", "options": ["Movie", "Club"]},
    {"category": "this_that", "text": "Cats or Dogs?", "options": ["Cats", "Dogs"]},
    {"category": "this_that", "text": "Texting or Calling?", "options": ["Texting", "Calling"]},
    {"category": "this_that", "text": "Sunrise or Sunset?", "options": ["Sunrise", "Sunset"]},

    # Most likely to
    {"category": "likely", "text": "Who is more likely to survive a zombie apocalypse?", "options": ["Me", "Partner"]},
    {"category": "likely", "text": "Who is more likely to cry at a movie?", "options": ["Me", "Partner"]},
    {"category": "likely", "text": "Who is the better cook?", "options": ["Me", "Partner"]},
    {"category": "likely", "text": "Who is more likely to forget an anniversary?", "options": ["Me", "Partner"]},
    {"category": "likely", "text": "Who is more likely to fall asleep first?", "options": ["Me", "Partner"]},

    # Would you rather
    {"category": "would_you_rather", "text": "Would you rather travel the world together or build a dream home?", "options": ["Travel the world", "Dream home"]},
    {"category": "would_you_rather", "text": "Would you rather have a picnic in the park or a candlelight dinner?", "options": ["Picnic", "Candlelight dinner"]},
    {"category": "would_you_rather", "text": "Would you rather relive our first date or skip ahead ten years?", "options": ["Relive first date", "Skip ahead"]},
    {"category": "would_you_rather", "text": "Would you rather cook together or order in?", "options": ["Cook together", "Order in"]},
    {"category": "would_you_rather", "text": "Would you rather road trip or fly?", "options": ["Road trip", "Fly"]},

    # Dare
    {"category": "dare", "text": "Stare contest! Don't blink for 30 seconds.", "options": []},
    {"category": "dare", "text": "Give your partner a sincere compliment.", "options": []},
    {"category": "dare", "text": "Do your best impression of your partner.", "options": []},
]


class QuestionBank:
    """题库（全局共享、只读）"""

    def __init__(self, db: Session):
        self.db = db

    async def list_all(self) -> List[Question]:
        return self.db.query(Question).order_by(Question.id).all()

    async def list_by_category(self, category: str) -> List[Question]:
        return self.db.query(Question).filter(
            Question.category == category
        ).order_by(Question.id).all()

    async def list_ids_by_category(self, category: str) -> List[int]:
        rows = self.db.query(Question.id).filter(
            Question.category == category
        ).order_by(Question.id).all()
        return [row[0] for row in rows]

    async def seed(self, entries: Iterable[Mapping]) -> int:
        """写入种子题目，题干已存在的跳过；返回新增数量"""
        existing = {row[0] for row in self.db.query(Question.text).all()}

        added = 0
        skipped = 0
        for entry in entries:
            if entry["text"] in existing:
                skipped += 1
                continue
            self.db.add(Question(
                category=entry["category"],
                text=entry["text"],
                options=list(entry.get("options") or [])
            ))
            existing.add(entry["text"])
            added += 1

        if added:
            self.db.commit()
        logger.info("题库种子写入完成：新增 %d 道，跳过 %d 道", added, skipped)
        return added
