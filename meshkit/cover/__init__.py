"""Registry of live code-coverage counters and coverage profile output."""