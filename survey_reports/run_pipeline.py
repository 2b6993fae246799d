import os
import json
import logging
import argparse
from typing import Dict, List, Literal, Optional, Union

from pydantic import BaseModel, Field

from survey_reports import analysis_utils as utils
from survey_reports import layouts
from survey_reports.modules.comparative_report import (
    AnalysisWorkbook,
    ComparativeConfig,
    ComparativeReport,
    as_workbook,
)
from survey_reports.modules.department_report import DepartmentReport
from survey_reports.modules.frequency_report import DEFAULT_HEADER_ROW, FrequencyReport
from survey_reports.modules.json_report import NESTED_JSON_NAME, JsonReport, save_nested_json
from survey_reports.modules.property_report import PropertyReport
from survey_reports.report_writer import write_styled_report, write_workbook


class SurveyJob(BaseModel):
    type: Literal["GENERIC", "PROPERTY", "FREQUENCY"]
    input: str = Field(..., description="Survey export workbook, relative to SURVEY_DATA_DIR.")
    sheet_name: str = Field(..., description="Name for the department sheet / output file.")
    prefix: Optional[str] = Field(None, description="Output prefix for PROPERTY jobs.")
    header_row: int = Field(DEFAULT_HEADER_ROW, description="Header row for FREQUENCY jobs (0-based).")


class PipelineConfig(BaseModel):
    jobs: List[SurveyJob]
    baseline_json: Optional[str] = None
    comparativo_json: Optional[str] = None
    excel_map: Dict[str, Union[str, AnalysisWorkbook]] = Field(default_factory=dict)
    dump_json: bool = False


JOBS = [
    SurveyJob(type="GENERIC", input="estadisticas_encuesta_2_Palacio.xlsx", sheet_name="Palacio"),
    SurveyJob(type="GENERIC", input="Estadisticas_encuesta_1_Pierre.xlsx", sheet_name="Pierre"),
    SurveyJob(type="PROPERTY", input="estadisticas_encuesta_3_Princess.xlsx", sheet_name="Princess", prefix="princess"),
]

# Baseline property name -> analysis workbook produced by JOBS
EXCEL_MAP = {
    "Palacio Mundo Imperial": "analisis_palacio.xlsx",
    "Pierre Mundo Imperial": "analisis_pierre.xlsx",
    "Princess Mundo Imperial": "analisis_princess_princess_mundo_imperial.xlsx",
}


def default_config() -> PipelineConfig:
    return PipelineConfig(
        jobs=JOBS,
        baseline_json=utils.BASELINE_JSON,
        comparativo_json=utils.COMPARATIVO_JSON,
        excel_map=dict(EXCEL_MAP),
    )


def load_config(path: str) -> PipelineConfig:
    with open(path, 'r', encoding='utf-8') as f:
        return PipelineConfig.model_validate(json.load(f))


def run_job(job: SurveyJob, output_dir: str) -> List[str]:
    """Runs one survey job and returns the workbooks it wrote."""
    input_path = utils.data_path(job.input)
    logging.info(f"Processing job: {job.input} ({job.type})")

    if job.type == "GENERIC":
        results = [DepartmentReport(layouts.get_layout(job.type)).process(input_path, job.sheet_name)]
    elif job.type == "PROPERTY":
        report = PropertyReport(layouts.get_layout(job.type), prefix=job.prefix or job.sheet_name.lower())
        results = report.process(input_path)
    else:
        results = [FrequencyReport(header_row=job.header_row).process(input_path, job.sheet_name)]

    saved = []
    for res in results:
        saved.append(write_workbook(res["sheets"], utils.output_path(res["outputName"], output_dir)))
    return saved


def run_survey_jobs(config: PipelineConfig, output_dir: str):
    for job in config.jobs:
        try:
            run_job(job, output_dir)
        except Exception as e:
            logging.exception(f"Error processing {job.input}: {e}")


def run_json_report(config: PipelineConfig, output_dir: str):
    json_path = utils.data_path(config.baseline_json)
    if not os.path.exists(json_path):
        logging.info(f"Skipping JSON report ({json_path} not found)")
        return None

    report = JsonReport().process(json_path)
    if config.dump_json:
        save_nested_json(report["nested"], utils.output_path(NESTED_JSON_NAME, output_dir))
    return write_styled_report(report, utils.output_path(report["outputName"], output_dir))


def resolve_excel_map(excel_map, output_dir):
    """Relative workbook paths in the map point at the output directory."""
    resolved = {}
    for prop, entry in excel_map.items():
        entry = as_workbook(entry)
        if not os.path.isabs(entry.path):
            entry = AnalysisWorkbook(path=os.path.join(output_dir, entry.path), sheet=entry.sheet)
        resolved[prop] = entry
    return resolved


def run_comparative_report(config: PipelineConfig, output_dir: str):
    comparativo_path = utils.data_path(config.comparativo_json)
    if not os.path.exists(comparativo_path):
        logging.info(f"Skipping comparative report ({comparativo_path} not found)")
        return None

    comp_config = ComparativeConfig(
        comparativo_path=comparativo_path,
        json_path=utils.data_path(config.baseline_json),
        excel_map=resolve_excel_map(config.excel_map, output_dir),
    )
    result = ComparativeReport().process(comp_config)
    return write_workbook(result["sheets"], utils.output_path(result["outputName"], output_dir))


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Run the survey analysis pipeline.")
    parser.add_argument("--config", help="JSON file with jobs / baseline_json / comparativo_json / excel_map.")
    parser.add_argument("--output-dir", default=None, help="Where reports are written (default: SURVEY_OUTPUT_DIR).")
    parser.add_argument("--skip-jobs", action="store_true", help="Skip the per-survey analysis workbooks.")
    parser.add_argument("--skip-json-report", action="store_true", help="Skip the styled report built from the baseline JSON.")
    parser.add_argument("--skip-comparative", action="store_true", help="Skip the baseline vs current comparison.")
    parser.add_argument("--dump-json", action="store_true", help="Also write the grouped baseline as reporte_final.json.")
    parser.add_argument("--log-level", default=None, help="Logging level (default: SURVEY_LOG_LEVEL or INFO).")
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    utils.setup_logging(args.log_level)
    logging.info("=== Starting Analysis Pipeline ===")

    config = load_config(args.config) if args.config else default_config()
    if args.dump_json:
        config.dump_json = True
    config.baseline_json = config.baseline_json or utils.BASELINE_JSON
    config.comparativo_json = config.comparativo_json or utils.COMPARATIVO_JSON
    output_dir = args.output_dir or utils.OUTPUT_DIR

    steps = []
    if not args.skip_jobs:
        steps.append(("Survey Analysis Jobs", run_survey_jobs))
    if not args.skip_json_report:
        steps.append(("JSON Numeric Report", run_json_report))
    if not args.skip_comparative:
        steps.append(("Comparative Report", run_comparative_report))

    failed = 0
    for name, func in steps:
        logging.info(f"--- Running {name} ---")
        try:
            func(config, output_dir)
        except Exception as e:
            failed += 1
            logging.exception(f"ERROR in {name}: {e}")

    logging.info("=== Pipeline Complete ===")
    return 1 if failed else 0


if __name__ == "__main__":
    raise SystemExit(main())
