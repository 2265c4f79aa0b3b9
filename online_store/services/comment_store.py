# online_store/services/comment_store.py
import threading


class CommentStore:
    """
    Komentarze administratora do zamowien.
    Tylko w pamieci procesu: bez trwalosci i bez historii, ostatni zapis wygrywa.
    Jedna instancja na aplikacje (tworzona w create_app).
    """

    def __init__(self):
        self._comments: dict[int, str] = {}
        self._lock = threading.Lock()

    def set_comment(self, cart_id: int, comment: str) -> None:
        with self._lock:
            self._comments[cart_id] = comment

    def get_comment(self, cart_id: int) -> str | None:
        with self._lock:
            return self._comments.get(cart_id)

    def clear(self) -> None:
        with self._lock:
            self._comments.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._comments)
