"""
Line sources feeding a ChainModel.

A line source is any object with a `lines()` method returning a lazy, finite
iterator of text lines in their original order. A source whose backing
resource is missing raises FileNotFoundError once iteration starts.

Classes:
    - FileLineSource: lines of a UTF-8 text file.
    - TextLineSource: lines of an in-memory string or list of strings.
    - CsvLineSource: values of one column of a CSV file, read with pandas.
"""

import pandas as pd


class FileLineSource:
    """Lines of a text file, trailing newline stripped."""

    def __init__(self, path, encoding="utf-8"):
        self.path = path
        self.encoding = encoding

    def lines(self):
        with open(self.path, "r", encoding=self.encoding) as f:
            for line in f:
                yield line.rstrip("\r\n")

    def __repr__(self):
        return f"FileLineSource({self.path!r})"


class TextLineSource:
    """Lines of a string (split with `splitlines`) or of an iterable of strings."""

    def __init__(self, text):
        self.text = text

    def lines(self):
        if isinstance(self.text, str):
            return iter(self.text.splitlines())
        return iter(self.text)

    def __repr__(self):
        return "TextLineSource(<in-memory>)"


class CsvLineSource:
    """
    Values of a single CSV column, one per line.

    Args:
        path (str): Path to the CSV file
        column (int or str): Column position, or column name when the file has a header
        header (int or None): Header row passed to `pandas.read_csv`, None for headerless files
        encoding (str): File encoding

    Notes:
        - Missing values (NaN) are skipped.
        - The whole file is read when iteration starts; rows are then yielded one at a time.
    """

    def __init__(self, path, column=0, header=None, encoding="UTF-8"):
        self.path = path
        self.column = column
        self.header = header
        self.encoding = encoding

    def lines(self):
        df = pd.read_csv(self.path, encoding=self.encoding, header=self.header)
        if df.empty:
            return
        if isinstance(self.column, int):
            series = df.iloc[:, self.column]
        else:
            series = df[self.column]
        for value in series.dropna():
            yield str(value)

    def __repr__(self):
        return f"CsvLineSource({self.path!r}, column={self.column!r})"
