'''The state-by-state electoral college and its election night simulation.

The :class:`engine.ElectoralCollegeEngine` computes per-state results from
candidate polling and aggregates the electoral votes of the states into
a national result. With progressive reporting, the states report their counts
gradually along generated timelines and call their results once the count is
decisive enough, like on an election night.
'''
