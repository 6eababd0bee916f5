"""Document title shown in the browser tab."""

LOADING_TITLE = "Loading..."


class DocumentTitle:
    def __init__(self, default: str):
        self.default = default
        self.value = default

    def loading(self) -> None:
        self.value = LOADING_TITLE

    def movie(self, title: str) -> None:
        self.value = f"Movie | {title}"

    def reset(self) -> None:
        self.value = self.default
