from fantasy_draft_board.services.board_session import BoardSession, open_session, save_session

__all__ = ["BoardSession", "open_session", "save_session"]
