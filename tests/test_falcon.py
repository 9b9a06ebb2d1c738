"""
Tests for Falcon-512 verification
"""

import pytest

from pqverify import (
    FALCON512_PARAMS,
    FALCON_RING,
    FalconParams,
    FalconVerifier,
    WireBackend,
    hash_to_point,
    hash_to_point_shake,
    verify_falcon,
    verify_falcon_hashed,
)
from pqverify.backend import center


@pytest.fixture(scope="module")
def verifier(falcon_backend):
    return FalconVerifier(backend=falcon_backend)


def squared_norm(backend, message, salt, s2, ntth):
    q = FALCON_RING.q
    hashed = hash_to_point(salt, message)
    product = backend.multiply(s2, ntth)
    s1 = [center(h - p, q) for h, p in zip(hashed, product)]
    return sum(c * c for c in s1) + sum(center(c, q) ** 2 for c in backend.coefficients(s2))


# Falcon-512 vector produced by an independent signer
KAT_MESSAGE = b"My name is Renaud from ZKNOX!!!!"
KAT_SALT = bytes.fromhex(
    "46b9dd2b0ba88d13233b3feb743eeb243fcd52ea"
    "62b81b82b50c27646ed5762fd75dc4ddd8c0f200"
)

KAT_S2 = [
    226161519869725251356344408907678892390104083586443563386125715426949738413,
    21562601821269046643200858246202301062882075022429333461940742114375696384039,
    90110472414887206477556374273677958001997210199677829434480895130167869638,
    21654478003405504511793214880183423382929023752422285237729687373819110359084,
    124010583294412487840928470639623851466514210374141790445951906817056047265,
    21265773698128382376022414973503284259154426469208937332107898559103680786159,
    21152693329132454665465594805050489554057022987498904220914967648446535106661,
    267122872098078746204314427438418999544365432680553123824944190772157612036,
    21682749335929743170997895048871458212437570849625560537002514737635745595434,
    21484861795441278719515884781875615016373675264589641157843053661627825926024,
    21494022030535633365205167718007907277461970816212877879540051900491462618919,
    84810874808887099016503540234665696039790220957637403019349383349827678057,
    350166225851747430063282192816376389746770807469089243428549425128277475466,
    650199881649548118992129068296237894454679779678092241702610418170527744121,
    21488719656068291800611809833048050573318660200348545716103717126286509420403,
    314829877589026152452887293853354466667021155167076575997137597709859106809,
    35345487657487992676444089392285082869581089981817556183765262333748457234,
    21614166714262062022744724588614947811478116106019858299625278902489629994820,
    152273369432049113794598368263972752042931312526597870853463921178997960704,
    21084111354649684158712973468179417192282084173425140862405837349011434766486,
    21670384457790930114458052024912458205631480789721490499424656469597800837116,
    379872172932402056331205938589211266183595970379019632768796329750222536804,
    245593521367258131080917704623762266216657855821763979281880033371241918282,
    21283440200703761945357331956834716141942358303792526371596883332396933251127,
    189052986446048398455180269543195197282143096421268665349796348614205046933,
    21504626235299717977365561039066129148841879524220507149017609506261092008069,
    434973774590266779008708861354942402923329948686241231971615661507036065573,
    21375639956089752449127111071353048175707725148465526277052153320707821547382,
    21594734092587436036182371931355996474990889855110505875435994529156361957075,
    21329707868621957044425685110229835681048781346542006194666559814521442598942,
    226161492811046565732054082664382647078339185537063904212969076231405449060,
    21541400788752694945415155366788038951273885644370092786472578455575017947183,
]

KAT_NTTH = [
    5662797900309780854973796610500849947334657117880689816302353465126500706865,
    19773102689601973621062070293263100534733440101750387150077711329493973274058,
    14606681890476865709816748627007131256488820167404174518724605890405097603719,
    15845234755931409677594030697035096324340457247480758851130851814703350289524,
    5524941775098342886171484209767745714294893760953145782448900256027476885810,
    15301033023652038200658165594502048003364566882283859976805808429697192567788,
    18875246040654000517074755552890901133645669291006567534900678519700207707731,
    11843395683334522200668269515783436692309636627649985746204914551011013629864,
    8419305811746464065544475584323153271481428319969733938911379662274846467111,
    18343417927809591481517183183479503623951147924071925629514120039495430967592,
    10007451325105194000131443764495043320645967197761209321537835667210153693191,
    779487061150515667795843171268512499191273448454307717194241961063365614179,
    14889466660684110621550004892629051623956217990147793956971155241422811501259,
    2995124819739638247263964985959552967489690950312509006670204449438399867779,
    16698797261630410217796026169071784061995015858612862963622742163763641855864,
    13129716852402613948762495927854872029721399215764359316540986925328111906305,
    8620514528683669238836845045565231437047299941974001946945409334379184590766,
    5184181041252042291984928267300200431567362250531180743278111084485128161037,
    15555356690664302555826193017277818624355238475260445618945780405430020481200,
    19264077329172342356817033544893125657281034846341493111114385757819435942150,
    8708853592016768361541207473719404660232059936330605270802350059910738161396,
    21018648773068189736719755689803981281912117625241701774409626083005150670687,
    267026197077955750670312407002345619518873569178283514941902712705828521229,
    14359242962640593260752841229079220345384234239741953227891227234975247894859,
    8320354099602406351863744856415421903486499003224102136141447162113864442068,
    17564344674783852357247325589247473882830766139750808683064015010041459773180,
    12601232530472338126510941067000966999586933909071534455578397454667291628041,
    17820703520112071877812607241017358905719406745793395857586668204300579510382,
    20977963461796112341763752649093803701879441191599296283127418471622134932903,
    5627732773047409045458881938100601008133088383905060686572856121439798106767,
    2602661464000108367786729796742170641292899005030508211661215565063118195399,
    20110282897068872581106488251090599973196923955248066799683528955504800771309,
]


class TestFalconParams:
    """Falcon-512 constants"""

    def test_falcon512(self):
        assert FALCON512_PARAMS.n == 512
        assert FALCON512_PARAMS.q == 12289
        assert FALCON512_PARAMS.sig_bound == 34034726
        assert FALCON512_PARAMS.salt_len == 40


class TestFalconVerify:
    """Accept and reject paths"""

    def test_valid(self, verifier, falcon_vector):
        message, salt, s2, ntth = falcon_vector
        assert verifier.verify(message, salt, s2, ntth)

    def test_module_level_entry(self, falcon_vector):
        assert verify_falcon(*falcon_vector)

    def test_idempotent(self, verifier, falcon_vector):
        results = [verifier.verify(*falcon_vector) for _ in range(3)]
        assert results == [True, True, True]

    def test_verify_hashed(self, verifier, falcon_vector):
        message, salt, s2, ntth = falcon_vector
        assert verifier.verify_hashed(verifier.hash_to_point(salt, message), s2, ntth)

    def test_module_level_hashed_entry(self, falcon_vector):
        message, salt, s2, ntth = falcon_vector
        assert verify_falcon_hashed(hash_to_point(salt, message), s2, ntth)
        assert not verify_falcon_hashed(hash_to_point(salt, message + b"!"), s2, ntth)

    def test_wrong_message(self, verifier, falcon_vector):
        message, salt, s2, ntth = falcon_vector
        assert not verifier.verify(message + b"?", salt, s2, ntth)

    def test_wrong_salt(self, verifier, falcon_vector):
        message, salt, s2, ntth = falcon_vector
        tampered = bytes([salt[0] ^ 1]) + salt[1:]
        assert not verifier.verify(message, tampered, s2, ntth)

    def test_flipped_s2_bit(self, verifier, falcon_vector):
        message, salt, s2, ntth = falcon_vector
        tampered = list(s2)
        tampered[0] ^= 1
        assert not verifier.verify(message, salt, tampered, ntth)

    def test_tampered_public_key(self, verifier, falcon_vector):
        message, salt, s2, ntth = falcon_vector
        tampered = list(ntth)
        tampered[5] ^= 1 << 20
        assert not verifier.verify(message, salt, s2, tampered)

    def test_other_hasher(self, falcon_backend, falcon_vector):
        verifier = FalconVerifier(backend=falcon_backend, hasher=hash_to_point_shake)
        assert not verifier.verify(*falcon_vector)


class TestFalconMalformed:
    """Malformed inputs are rejected, not raised"""

    def test_short_s2(self, verifier, falcon_vector):
        message, salt, s2, ntth = falcon_vector
        assert not verifier.verify(message, salt, s2[:-1], ntth)

    def test_long_ntth(self, verifier, falcon_vector):
        message, salt, s2, ntth = falcon_vector
        assert not verifier.verify(message, salt, s2, list(ntth) + [0])

    def test_expanded_s2(self, verifier, falcon_backend, falcon_vector):
        """Only the compact form is accepted at the verifier"""
        message, salt, s2, ntth = falcon_vector
        assert not verifier.verify(message, salt, falcon_backend.coefficients(s2), ntth)

    def test_word_too_wide(self, verifier, falcon_vector):
        message, salt, s2, ntth = falcon_vector
        tampered = list(s2)
        tampered[0] |= 1 << 256
        assert not verifier.verify(message, salt, tampered, ntth)

    def test_negative_word(self, verifier, falcon_vector):
        message, salt, s2, ntth = falcon_vector
        tampered = list(ntth)
        tampered[0] = -1
        assert not verifier.verify(message, salt, s2, tampered)

    def test_coefficient_not_reduced(self, verifier, falcon_vector):
        message, salt, s2, ntth = falcon_vector
        tampered = list(s2)
        tampered[3] |= 0xFFFF
        assert not verifier.verify(message, salt, tampered, ntth)

    def test_hashed_wrong_length(self, verifier, falcon_vector):
        _, _, s2, ntth = falcon_vector
        assert not verifier.verify_hashed([0] * 511, s2, ntth)

    def test_hashed_out_of_range(self, verifier, falcon_vector):
        _, _, s2, ntth = falcon_vector
        assert not verifier.verify_hashed([12289] + [0] * 511, s2, ntth)


class TestFalconBound:
    """The squared norm must be strictly below sig_bound"""

    def test_norm_is_small(self, falcon_backend, falcon_vector):
        assert squared_norm(falcon_backend, *falcon_vector) < FALCON512_PARAMS.sig_bound

    def test_bound_is_exclusive(self, falcon_backend, falcon_vector):
        norm = squared_norm(falcon_backend, *falcon_vector)
        at_bound = FalconParams(name="tight", ring=FALCON_RING, sig_bound=norm, salt_len=40)
        above = FalconParams(name="loose", ring=FALCON_RING, sig_bound=norm + 1, salt_len=40)
        assert not FalconVerifier(at_bound, falcon_backend).verify(*falcon_vector)
        assert FalconVerifier(above, falcon_backend).verify(*falcon_vector)


class TestFalconWire:
    """Verification through the accelerator wire format"""

    def test_valid(self, falcon_wire_backend, falcon_vector):
        assert FalconVerifier(backend=falcon_wire_backend).verify(*falcon_vector)

    def test_invalid(self, falcon_wire_backend, falcon_vector):
        message, salt, s2, ntth = falcon_vector
        assert not FalconVerifier(backend=falcon_wire_backend).verify(b"other", salt, s2, ntth)

    def test_module_level_with_backend(self, falcon_vector):
        assert verify_falcon(*falcon_vector, backend=WireBackend(FALCON_RING))


class TestFalconKnownAnswer:
    """A signature from an independent Falcon signer over the Keccak PRNG hash"""

    def test_accepts(self, verifier):
        assert verifier.verify(KAT_MESSAGE, KAT_SALT, KAT_S2, KAT_NTTH)

    def test_accepts_over_wire(self, falcon_wire_backend):
        verifier = FalconVerifier(backend=falcon_wire_backend)
        assert verifier.verify(KAT_MESSAGE, KAT_SALT, KAT_S2, KAT_NTTH)

    def test_module_level_entries(self):
        assert verify_falcon(KAT_MESSAGE, KAT_SALT, KAT_S2, KAT_NTTH)
        hashed = hash_to_point(KAT_SALT, KAT_MESSAGE)
        assert verify_falcon_hashed(hashed, KAT_S2, KAT_NTTH)

    def test_norm(self, falcon_backend):
        """14611247 + 13410419, under the 34034726 bound"""
        norm = squared_norm(falcon_backend, KAT_MESSAGE, KAT_SALT, KAT_S2, KAT_NTTH)
        assert norm == 14611247 + 13410419

    def test_rejects_modified_s2(self, verifier):
        tampered = list(KAT_S2)
        tampered[0] += 1
        assert not verifier.verify(KAT_MESSAGE, KAT_SALT, tampered, KAT_NTTH)

    def test_rejects_salt_first_hash(self, verifier):
        """Hashing salt || message instead of message || salt misses"""
        hashed = hash_to_point(KAT_MESSAGE, KAT_SALT)
        assert not verifier.verify_hashed(hashed, KAT_S2, KAT_NTTH)

    def test_rejects_other_message(self, verifier):
        assert not verifier.verify(b"My name is Renaud from ZKNOX!!!?", KAT_SALT, KAT_S2, KAT_NTTH)
