import pathlib


class BufferedTextReader:
    def __init__(self, *, file_path: str | pathlib.Path, maximum_buffer_size_in_bytes: int = 10**8):
        """
        Lazily read the lines of a text file in buffers of a bounded size.

        Each buffer ends on a line break, so no line is ever split across two buffers.

        Parameters
        ----------
        file_path : string or pathlib.Path
            The path to the text file to be read.
        maximum_buffer_size_in_bytes : int, default: 100 MB
            The maximum number of bytes read from the file on each iteration.
        """
        self.file_path = pathlib.Path(file_path)
        self.maximum_buffer_size_in_bytes = maximum_buffer_size_in_bytes

        self.total_file_size = self.file_path.stat().st_size
        self.offset = 0

    def __iter__(self):
        return self

    def __next__(self) -> list[str]:
        """Retrieve the lines of the next buffer, or raise StopIteration if the file is exhausted."""
        if self.offset >= self.total_file_size:
            raise StopIteration

        with open(file=self.file_path, mode="rb") as io:
            io.seek(self.offset)
            intermediate_bytes = io.read(self.maximum_buffer_size_in_bytes)

        # The file shrinking while being read is not expected for an append-only log
        if len(intermediate_bytes) == 0:
            self.offset = self.total_file_size
            raise StopIteration

        is_last_buffer = self.offset + len(intermediate_bytes) >= self.total_file_size
        if is_last_buffer:
            buffer_bytes = intermediate_bytes
        else:
            last_line_break_index = intermediate_bytes.rfind(b"\n")
            if last_line_break_index == -1:
                raise ValueError(
                    f"BufferedTextReader encountered a line at offset {self.offset} that exceeds the buffer size! "
                    "Try increasing the `maximum_buffer_size_in_bytes` to account for this line."
                )
            buffer_bytes = intermediate_bytes[: last_line_break_index + 1]

        self.offset += len(buffer_bytes)

        return buffer_bytes.decode("utf-8").splitlines()
