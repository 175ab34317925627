"""
Momentum — A Social Fitness-Tracking Backend
=============================================
Members register, log workouts, earn points, run challenges, follow each
other and compete on a leaderboard.

Package layout::

    momentum/
    ├── config.py          # YAML → typed Python config
    ├── constants.py       # Points rate, validation patterns, defaults
    ├── errors.py          # Typed domain failures
    ├── database/
    │   ├── engine.py      # SQLAlchemy engine + async helper
    │   ├── models.py      # ORM models (users, activities, challenges, follows)
    │   └── store.py       # EntityStore — id-keyed mapping over one model
    ├── engine/
    │   ├── validation.py  # Pure field validators
    │   └── leaderboard.py # Pure ranking + pagination window
    ├── services/
    │   ├── users.py       # UserDirectory — unique emails, point balances
    │   ├── activities.py  # ActivityLedger — workouts drive point accrual
    │   ├── challenges.py  # ChallengeBoard — challenges + participants
    │   ├── follows.py     # FollowGraph — directed follow edges
    │   ├── tracker.py     # FitnessTracker — unit of work over all of the above
    │   └── log_buffer.py  # In-memory log tail for the API
    └── api/
        ├── main.py        # FastAPI app
        ├── auth.py        # Email/password login → JWT
        └── routes/        # REST endpoints
"""

__version__ = "0.1.0"
