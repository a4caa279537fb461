"""Run the whole Doginal Bat pipeline."""

from loguru import logger

from doginal_ownership import step_1_collection_file, step_2_download_pages
from doginal_ownership.process_ownership import process_doginal_directory


def main_bat_pipeline() -> None:
    """Run the whole Doginal Bat pipeline."""
    logger.info("Starting Doginal Bat pipeline...")
    step_1_collection_file.main()
    step_2_download_pages.main()
    process_doginal_directory(step_2_download_pages.step_2_output_folder_path)


if __name__ == "__main__":
    main_bat_pipeline()
