"""Message Synthesis Package"""

from cmsg.synth.heuristics import generate_heuristic_message, file_stem, EMPTY_MESSAGE
from cmsg.synth.synthesizer import MessageSynthesizer, generate_commit_message, resolve_client

__all__ = [
    "generate_heuristic_message",
    "file_stem",
    "EMPTY_MESSAGE",
    "MessageSynthesizer",
    "generate_commit_message",
    "resolve_client",
]
