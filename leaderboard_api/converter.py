from typing import Any, List, Sequence, Tuple, Union

from leaderboard_api.domain.leaderboard_rules import member_display_name
from leaderboard_api.models.dc_models import LeaderboardEntryModel

ScoredMember = Tuple[str, float]


class DataConverter:
    """This class is used to convert Redis replies into API models."""

    def convert_zrange_to_pairs(self, reply: Sequence[Any]) -> List[ScoredMember]:
        """Normalize a ZRANGE ... WITHSCORES reply to (member, score) pairs

        Args:
            reply (Sequence[Any]): Either a list of [member, score] pairs or a
                flat list alternating member and score

        Returns:
            List[ScoredMember]: Members with float scores, in reply order
        """
        if not reply:
            return []
        if all(isinstance(item, (list, tuple)) for item in reply):
            rows = [(item[0], item[1]) for item in reply]
        else:
            if len(reply) % 2:
                raise ValueError(f"Unpaired member/score reply: {reply!r}")
            rows = list(zip(reply[0::2], reply[1::2]))
        return [(self._decode(member), float(score)) for member, score in rows]

    def convert_pairs_to_entries(
        self, pairs: List[ScoredMember]
    ) -> List[LeaderboardEntryModel]:
        """Convert scored members to the entries sent to the client

        Args:
            pairs (List[ScoredMember]): (member, score) pairs, highest first

        Returns:
            List[LeaderboardEntryModel]: Display name and score of each entry
        """
        return [
            LeaderboardEntryModel(
                name=member_display_name(member), score=self._plain_score(score)
            )
            for member, score in pairs
        ]

    @staticmethod
    def _decode(member: Union[str, bytes]) -> str:
        if isinstance(member, bytes):
            return member.decode("utf-8")
        return member

    @staticmethod
    def _plain_score(score: float) -> Union[int, float]:
        # Redis scores are doubles; whole numbers go back out as integers.
        if score.is_integer():
            return int(score)
        return score
