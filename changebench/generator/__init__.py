from .workload import WorkloadGenerator, generate_payload, seed_documents

__all__ = ["WorkloadGenerator", "generate_payload", "seed_documents"]
