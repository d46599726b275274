"""SQLAlchemy persistence for users, posts, comments and likes."""
