from rewards.services import accounting, admin, seeding, sessions

__all__ = ["accounting", "admin", "seeding", "sessions"]
