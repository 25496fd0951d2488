"""
CFG pipeline: load a Bril program, build one CFG per function, render.

Functions are independent, so CFG construction can be spread over a worker
pool (`n_jobs`). Output always follows the program's function order.
"""

import json
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional

from ..data.loader import load_program
from ..graphs.cfg import ControlFlowGraph, build_cfg, serialize_cfg
from ..graphs.dot import to_dot
from ..ir import Function, Program
from ..utils.logging import get_logger
from ..utils.multiproc import parallel_map
from .config import PipelineConfig


@dataclass
class FunctionCFG:
    name: str
    cfg: ControlFlowGraph


def _build_function_cfg(function: Function) -> FunctionCFG:
    return FunctionCFG(name=function.name, cfg=build_cfg(function))


def function_stats(result: FunctionCFG) -> Dict[str, Any]:
    """Summary counts for one function's CFG"""
    cfg = result.cfg
    return {
        'blocks': len(cfg.blocks),
        'edges': len(cfg.edges),
        'empty_blocks': sum(1 for b in cfg.blocks if not b.instrs),
        'unreachable_blocks': cfg.unreachable_blocks(),
        'dangling_targets': cfg.dangling_targets(),
    }


class CFGPipeline:
    """Build and render CFGs for every function of a program"""

    def __init__(self, config: Optional[PipelineConfig] = None):
        self.config = config or PipelineConfig()
        self.logger = get_logger('pipeline')

    def select_functions(self, program: Program) -> List[Function]:
        if not self.config.functions:
            return list(program.functions)

        selected = []
        for name in self.config.functions:
            function = program.get_function(name)
            if function is None:
                self.logger.warning(f"Function '{name}' not found in program, skipping")
                continue
            selected.append(function)
        return selected

    def build(self, program: Program) -> List[FunctionCFG]:
        functions = self.select_functions(program)
        chunk_size = self.config.chunk_size
        results: List[FunctionCFG] = []

        progress = None
        if self.config.show_progress:
            from tqdm import tqdm
            progress = tqdm(total=len(functions), desc="Building CFGs", file=sys.stderr)

        for i in range(0, len(functions), chunk_size):
            chunk = functions[i:i + chunk_size]
            results.extend(parallel_map(_build_function_cfg, chunk, num_workers=self.config.n_jobs))
            if progress is not None:
                progress.update(len(chunk))

        if progress is not None:
            progress.close()

        for result in results:
            dangling = result.cfg.dangling_targets()
            if dangling:
                self.logger.warning(
                    f"Function '{result.name}' has edges to unknown labels: {', '.join(dangling)}"
                )

        self.logger.info(f"Built {len(results)} CFG(s)")
        return results

    def render(self, results: List[FunctionCFG]) -> str:
        if self.config.output_format == 'json':
            payload = {r.name: serialize_cfg(r.cfg) for r in results}
            return json.dumps(payload, indent=2)
        return "\n".join(to_dot(r.cfg, r.name) for r in results)

    def stats(self, results: List[FunctionCFG]) -> Dict[str, Dict[str, Any]]:
        return {r.name: function_stats(r) for r in results}

    def load(self) -> Program:
        return load_program(self.config.input_path)

    def write(self, text: str) -> None:
        output_path = self.config.output_path
        if output_path is None or output_path == '-':
            sys.stdout.write(text + "\n")
            return
        path = Path(output_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text + "\n", encoding='utf-8')
        self.logger.info(f"Wrote output to {path}")

    def run(self) -> List[FunctionCFG]:
        """Load, build, render and write according to the config"""
        program = self.load()
        results = self.build(program)
        self.write(self.render(results))
        return results


def run_pipeline(config: Optional[PipelineConfig] = None) -> List[FunctionCFG]:
    """Convenience function to run the full pipeline"""
    return CFGPipeline(config).run()
