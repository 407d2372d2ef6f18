from pagenotice.services.messages import Message, MessageStore, MessageStoreError
from pagenotice.services.notices import NoticeResolver
from pagenotice.services.output import OutputPage
from pagenotice.services.renderer import MarkupRenderer, strip_outer_paragraph

__all__ = [
    "Message", "MessageStore", "MessageStoreError",
    "NoticeResolver",
    "OutputPage",
    "MarkupRenderer", "strip_outer_paragraph",
]
