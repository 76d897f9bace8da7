import csv
import os

from juicescout.models.helpjuice import Answer, Category, Question
from juicescout.utils.errors import RecordFormatError

CATEGORY_COLUMNS = ("id", "parent", "name")
QUESTION_COLUMNS = ("name", "category", "id", "views")
ANSWER_COLUMNS = ("question", "body")


def parse_csv(csv_path):
    """Read a HelpJuice CSV export into a list of rows.

    The header row is kept as the first entry; the ``process_*`` functions
    skip it.  Blank lines are ignored and every other row must have as many
    fields as the header.

    Args:
        csv_path (str): Path to the export file.

    Returns:
        list: A list of rows, each row a list of field strings.

    Raises:
        OSError: If the file cannot be opened or read.
        RecordFormatError: If the content is not valid comma separated text,
            cannot be decoded as UTF-8, or has rows of differing width.
    """
    file_path = os.path.normpath(csv_path)
    records = []
    with open(file_path, mode="r", encoding="utf-8-sig", newline="") as csvfile:
        reader = csv.reader(csvfile, strict=True)
        width = None
        try:
            for row in reader:
                if not row:
                    continue
                if width is None:
                    width = len(row)
                elif len(row) != width:
                    raise RecordFormatError(
                        f"{file_path}, line {reader.line_num}: expected {width} fields, found {len(row)}"
                    )
                records.append(row)
        except csv.Error as e:
            raise RecordFormatError(f"{file_path}, line {reader.line_num}: {e}") from e
        except UnicodeDecodeError as e:
            raise RecordFormatError(f"{file_path} is not valid UTF-8: {e}") from e

    print(f"[INFO] Successfully parsed: {file_path}")
    return records


def _data_rows(rows, columns, kind):
    """Yield every row after the header.

    Raises:
        RecordFormatError: If a row is shorter than ``columns``.
    """
    for index, row in enumerate(rows):
        # Skip the header row
        if index == 0:
            continue
        if len(row) < len(columns):
            raise RecordFormatError(
                f"{kind} row {index + 1} has {len(row)} columns, expected {', '.join(columns)}"
            )
        yield row


def process_categories(categories):
    """Convert raw ``id,parent,name`` rows into :class:`Category` objects."""
    processed = []
    for row in _data_rows(categories, CATEGORY_COLUMNS, "Category"):
        category = Category(id=row[0], parent=row[1], name=row[2])
        processed.append(category)
        print(f"[INFO] Processed category: {category.name}")
    return processed


def process_questions(questions):
    """Convert raw ``name,category,id,views`` rows into :class:`Question` objects."""
    processed = []
    for row in _data_rows(questions, QUESTION_COLUMNS, "Question"):
        question = Question(name=row[0], category=row[1], id=row[2], views=row[3])
        processed.append(question)
        print(f"[INFO] Processed question: {question.name}")
    return processed


def process_answers(answers):
    """Convert raw ``question,body`` rows into :class:`Answer` objects."""
    processed = []
    for row in _data_rows(answers, ANSWER_COLUMNS, "Answer"):
        answer = Answer(question=row[0], body=row[1])
        processed.append(answer)
        print(f"[INFO] Processed answer for question: {answer.question}")
    return processed
