"""
Headless entry point: tailor a resume PDF to a job description file.
"""

import argparse
import asyncio
import logging
import mimetypes
import sys
from pathlib import Path

from resume_tailor.config import EXPORT_FILENAME
from resume_tailor.models.schema import PipelineStatus
from resume_tailor.services.errors import TailorError
from resume_tailor.services.export import export_resume_pdf
from resume_tailor.services.pipeline import TailorSession


def _print_status(status: PipelineStatus) -> None:
    if status.busy:
        print(f"  {status.label}")


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        description="Tailor a resume PDF to a job description",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s resume.pdf job.txt
  %(prog)s resume.pdf job.txt -o out/acme.pdf
        """,
    )
    parser.add_argument("resume_pdf", help="Path to the resume PDF")
    parser.add_argument("job_requirements", help="Path to a text file with the job requirements")
    parser.add_argument(
        "-o", "--output",
        default=EXPORT_FILENAME,
        help=f"Where to write the tailored PDF (default: {EXPORT_FILENAME})",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.WARNING, format="%(levelname)s %(name)s: %(message)s")

    resume_path = Path(args.resume_pdf)
    session = TailorSession()
    session.set_progress_callback(_print_status)
    try:
        content_type = mimetypes.guess_type(resume_path.name)[0] or ""
        session.select_file(resume_path.name, content_type, resume_path.read_bytes())
        final = asyncio.run(session.tailor(Path(args.job_requirements).read_text(encoding="utf-8")))
        if final is None:
            print(f"✗ {session.error_message}", file=sys.stderr)
            return 1
        output = Path(args.output)
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_bytes(export_resume_pdf(final))
    except (TailorError, OSError) as e:
        print(f"✗ {e}", file=sys.stderr)
        return 1

    print(f"✓ Tailored resume for {final.personal_info.name or 'candidate'} written to {output}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
