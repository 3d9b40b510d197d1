from hexgame.AgentBase import AgentBase


class Player:
    """A named seat at the table, bound to the agent that plays it."""

    def __init__(self, name: str, agent: AgentBase):
        self.name = name
        self.agent = agent
        self.turn_times: list[float] = []

    def __repr__(self) -> str:
        return f"Player({self.name!r}, {type(self.agent).__name__})"
