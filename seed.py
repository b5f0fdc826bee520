from newsroom.database import SessionLocal, init_db
from newsroom.models import Article, ArticleStatus, ArticleType, Role, User

# Create tables
init_db()

db = SessionLocal()

# Clear existing data
db.query(Article).delete()
db.query(User).delete()

# Sample users
reporter = User(username="asha", email="asha@newsroom.local", role=Role.REPORTER.value)
second_reporter = User(username="vikram", email="vikram@newsroom.local", role=Role.REPORTER.value)
editor = User(username="meera", email="meera@newsroom.local", role=Role.EDITOR.value)
db.add_all([reporter, second_reporter, editor])
db.flush()

# Sample articles, one per interesting status
articles = [
    Article(
        title="Monsoon arrives early in Kerala",
        content="The India Meteorological Department confirmed the onset...",
        category="weather",
        tags=["monsoon", "kerala"],
        type=ArticleType.TEXT.value,
        status=ArticleStatus.DRAFT.value,
        reporter_id=reporter.id,
    ),
    Article(
        title="City council approves metro extension",
        content="The council voted 32-4 in favour of the new line...",
        category="city",
        tags=["metro", "transport"],
        type=ArticleType.TEXT.value,
        status=ArticleStatus.SUBMITTED.value,
        reporter_id=reporter.id,
    ),
    Article(
        title="Interview: the last letterpress in the old town",
        content="Audio interview with the owner.",
        category="culture",
        tags=["interview"],
        type=ArticleType.AUDIO.value,
        audio_url="https://cdn.newsroom.local/audio/letterpress.mp3",
        status=ArticleStatus.REVERTED.value,
        remarks="Needs a second source for the closing date.",
        reporter_id=second_reporter.id,
        editor_id=editor.id,
    ),
    Article(
        title="Match highlights: state finals",
        content="Highlights from the final.",
        category="sports",
        tags=["cricket"],
        type=ArticleType.VIDEO.value,
        video_url="https://cdn.newsroom.local/video/finals.mp4",
        thumbnail_url="https://cdn.newsroom.local/img/finals.jpg",
        status=ArticleStatus.SCHEDULED.value,
        scheduled_posts=[
            {"platform": "twitter", "date": "2030-01-01", "time": "09:00", "isPosted": False},
            {"platform": "facebook", "date": "2030-01-01", "time": "10:30", "isPosted": False},
        ],
        reporter_id=second_reporter.id,
        editor_id=editor.id,
    ),
]

db.add_all(articles)
db.commit()

print("Database seeded successfully!")
print(f"  - 3 users (2 reporters, 1 editor)")
print(f"  - {len(articles)} articles")

db.close()
