import os

import pandas as pd


class SudokuDataset:
    """
    Puzzle collection backed by a pandas DataFrame.

    Accepts either a CSV with a `quizzes` column (and optionally `solutions`,
    Kaggle 1M-sudoku layout, blanks as '0'), or a plain text file with one
    81-char puzzle per line (blank lines and '#' comments skipped).
    """

    def __init__(self, path, blank='0', limit=None):
        if not (path and os.path.exists(path)):
            raise FileNotFoundError(f"Dataset file not found at {path}")

        self.path = path
        self.blank = blank

        if path.endswith('.csv'):
            # dtype=str keeps leading zeros
            df = pd.read_csv(path, dtype=str, keep_default_na=False)
            if 'quizzes' not in df.columns:
                df = df.rename(columns={df.columns[0]: 'quizzes'})
        else:
            with open(path, 'r') as f:
                lines = [line.strip() for line in f]
            df = pd.DataFrame({'quizzes': [l for l in lines if l and not l.startswith('#')]})

        if 'solutions' not in df.columns:
            df['solutions'] = None

        if limit is not None:
            df = df.head(limit)

        self.df = df.reset_index(drop=True)

    def __len__(self):
        return len(self.df)

    def __getitem__(self, idx):
        row = self.df.iloc[idx]
        solution = row['solutions']
        return row['quizzes'], (solution if solution else None)

    @property
    def has_solutions(self):
        return bool(self.df['solutions'].astype(bool).any())
