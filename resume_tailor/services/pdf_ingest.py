from io import BytesIO, StringIO
import logging
from pdfminer.high_level import extract_text_to_fp
from pdfminer.psparser import PSException
from resume_tailor.services.errors import ExtractionError

logger = logging.getLogger(__name__)

# pdfminer is chatty about malformed fonts and CropBoxes; every PDF parse error derives from PSException
logging.getLogger("pdfminer").setLevel(logging.ERROR)

NO_TEXT_MESSAGE = "No text extracted from PDF. If scanned, OCR is needed."


def extract_text_from_pdf(content: bytes) -> str:
	output = StringIO()
	try:
		extract_text_to_fp(BytesIO(content), output, laparams=None)
	except (PSException, ValueError, TypeError, KeyError, AssertionError) as e:
		logger.warning("ingest: unreadable pdf bytes=%d err=%s", len(content), e)
		raise ExtractionError() from e
	text = output.getvalue()
	if not text.strip():
		raise ExtractionError(NO_TEXT_MESSAGE)
	return text
