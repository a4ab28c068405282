import logging
from datetime import datetime
from typing import Any, Callable, Optional

from spendwise import aggregation, config, events, report, transforms
from spendwise.domain import Goal
from spendwise.functional import Either, Right
from spendwise.storage import JsonStore

logger = logging.getLogger(__name__)


class BudgetTracker:
    """Owns the transactions, categories and goals of one user.

    Commands validate, compute the new state with the pure functions in
    ``transforms``/``aggregation``, persist it through the store and then
    publish a change event. They return ``Either``: ``Left(error)`` leaves
    state and storage untouched, ``Right(value)`` means the change is saved.
    Commands that reference an id which no longer exists succeed without
    changing anything.
    """

    def __init__(self, store: Optional[JsonStore] = None, bus: Optional[events.EventBus] = None,
                 clock: Callable[[], datetime] = datetime.now):
        self.store = store or JsonStore()
        self.bus = bus or events.EventBus()
        self.clock = clock
        self.transactions = self.store.load_transactions()
        self.categories = self.store.load_categories()
        self.goals = self.store.load_goals()
        logger.debug(
            "Loaded %d transactions, %d categories, %d goals",
            len(self.transactions), len(self.categories), len(self.goals),
        )

    def _rejected(self, command: str, result: Either) -> Either:
        if result.is_left():
            logger.info("%s rejected: %s", command, result.get_error().get("message"))
        return result

    # ---------- transactions ----------

    def add_transaction(self, description: Any, amount: Any, category: Any, tx_date: Any) -> Either:
        result = transforms.add_transaction(
            self.transactions, self.categories, description, amount, category, tx_date
        )
        if result.is_left():
            return self._rejected("add_transaction", result)

        self.transactions = result.get_or_else(self.transactions)
        self.store.save_transactions(self.transactions)
        added = self.transactions[-1]
        self.bus.publish(events.TRANSACTION_ADDED, {
            "id": added.id, "description": added.description, "amount": added.amount,
        })
        return Right(added)

    def delete_transaction(self, tx_id: int) -> Either:
        if transforms.find_transaction(self.transactions, tx_id).is_none():
            return Right(None)
        self.transactions = transforms.delete_transaction(self.transactions, tx_id)
        self.store.save_transactions(self.transactions)
        self.bus.publish(events.TRANSACTION_DELETED, {"id": tx_id})
        return Right(tx_id)

    # ---------- categories ----------

    def add_category(self, name: Any) -> Either:
        result = transforms.add_category(self.categories, name)
        if result.is_left():
            return self._rejected("add_category", result)

        self.categories = result.get_or_else(self.categories)
        self.store.save_categories(self.categories)
        self.bus.publish(events.CATEGORY_ADDED, {"category": self.categories[-1]})
        return Right(self.categories[-1])

    def delete_category(self, name: str) -> Either:
        result = transforms.delete_category(self.categories, self.transactions, name)
        if result.is_left():
            return self._rejected("delete_category", result)

        categories, trans = result.get_or_else((self.categories, self.transactions))
        if categories == self.categories:
            return Right(name)
        moved = sum(1 for old, new in zip(self.transactions, trans) if old.category != new.category)
        self._commit(transactions=trans, categories=categories)
        self.bus.publish(events.CATEGORY_DELETED, {"category": name, "reassigned": moved})
        return Right(name)

    # ---------- goals ----------

    def add_goal(self, name: Any, target_amount: Any, target_date: Any, initial_amount: Any = 0) -> Either:
        result = transforms.add_goal(
            self.goals, name, target_amount, target_date, initial_amount, now=self.clock()
        )
        if result.is_left():
            return self._rejected("add_goal", result)

        self.goals = result.get_or_else(self.goals)
        self.store.save_goals(self.goals)
        goal = self.goals[-1]
        self.bus.publish(events.GOAL_ADDED, {"id": goal.id, "name": goal.name})
        return Right(goal)

    def edit_goal(self, goal_id: int, name: Optional[str] = None, target_amount: Any = None,
                  target_date: Any = None) -> Either:
        result = transforms.edit_goal(
            self.goals, goal_id, name, target_amount, target_date, today=self.clock().date()
        )
        if result.is_left():
            return self._rejected("edit_goal", result)

        goals = result.get_or_else(self.goals)
        if goals == self.goals:
            return Right(None)
        self.goals = goals
        self.store.save_goals(self.goals)
        goal = transforms.find_goal(self.goals, goal_id).get_or_else(None)
        self.bus.publish(events.GOAL_UPDATED, {"id": goal.id, "name": goal.name})
        return Right(goal)

    def delete_goal(self, goal_id: int) -> Either:
        if transforms.find_goal(self.goals, goal_id).is_none():
            return Right(None)
        self.goals = transforms.delete_goal(self.goals, goal_id)
        self.store.save_goals(self.goals)
        self.bus.publish(events.GOAL_DELETED, {"id": goal_id})
        return Right(goal_id)

    def contribute_to_goal(self, goal_id: int, amount: Any) -> Either:
        """Move money from the balance into a goal, recorded as a Savings expense."""
        found = transforms.find_goal(self.goals, goal_id)
        if found.is_none():
            return Right(None)

        result = aggregation.apply_contribution(
            found.get_or_else(None), amount, self.totals().balance, self.transactions, now=self.clock()
        )
        if result.is_left():
            return self._rejected("contribute_to_goal", result)

        goal, contribution = result.get_or_else(None)
        self._commit(
            transactions=self.transactions + (contribution,),
            goals=transforms.replace_goal(self.goals, goal),
        )
        self.bus.publish(events.GOAL_CONTRIBUTED, {
            "id": goal.id, "name": goal.name, "amount": -contribution.amount,
            "transaction_id": contribution.id,
        })
        return Right((goal, contribution))

    def _commit(self, **changes) -> None:
        """Persist several collections as one unit.

        If a later save fails, collections already written are restored and
        the in-memory state is left as it was before the call.
        """
        savers = {
            "transactions": self.store.save_transactions,
            "categories": self.store.save_categories,
            "goals": self.store.save_goals,
        }
        previous = {name: getattr(self, name) for name in changes}
        written = []
        try:
            for name, value in changes.items():
                savers[name](value)
                written.append(name)
        except Exception:
            logger.exception("Saving %s failed, restoring %s", list(changes), written)
            for name in written:
                savers[name](previous[name])
            raise
        for name, value in changes.items():
            setattr(self, name, value)

    # ---------- queries ----------

    def totals(self) -> aggregation.Totals:
        return aggregation.compute_totals(self.transactions)

    def breakdown(self) -> tuple[tuple[str, float], ...]:
        return aggregation.compute_category_breakdown(self.transactions)

    def chart_scale(self) -> aggregation.ChartScale:
        return aggregation.compute_chart_scale(self.breakdown(), config.CHART_TICKS)

    def goal_progress(self, goal: Goal) -> aggregation.GoalProgress:
        return aggregation.compute_goal_progress(goal, self.clock())

    def recent(self, limit: int = config.RECENT_LIMIT):
        return aggregation.recent_transactions(self.transactions, limit)

    def report_pdf(self) -> bytes:
        return report.build_report(self.transactions, self.goals, self.clock())
